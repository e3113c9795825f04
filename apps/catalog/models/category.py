from django.db import models
from django.utils.text import slugify


class ProductCategory(models.Model):
    """
    Category used to group root products in the storefront.
    Examples: Smartphones, Camisetas
    """
    name = models.CharField(
        max_length=200,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=200,
        unique=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Categoria'
        verbose_name_plural = 'Categorias'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name) or 'categoria'
            # Ensure unique slug
            base_slug = self.slug
            counter = 1
            while ProductCategory.objects.filter(slug=self.slug).exclude(pk=self.pk).exists():
                self.slug = f"{base_slug}-{counter}"
                counter += 1
        super().save(*args, **kwargs)

    @classmethod
    def get_or_create_by_name(cls, name):
        """First category with this exact name, created when missing."""
        category = cls.objects.filter(name=name).order_by('pk').first()
        if category is None:
            category = cls.objects.create(name=name)
        return category


class ProductCategorization(models.Model):
    """Through model linking Product to ProductCategory."""
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='product_categorizations',
        verbose_name='Produto'
    )
    product_category = models.ForeignKey(
        ProductCategory,
        on_delete=models.CASCADE,
        related_name='product_categorizations',
        verbose_name='Categoria'
    )

    class Meta:
        unique_together = ['product', 'product_category']
        verbose_name = 'Categorização'
        verbose_name_plural = 'Categorizações'

    def __str__(self):
        return f"{self.product} - {self.product_category}"
