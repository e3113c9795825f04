from decimal import Decimal

from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.db import models, transaction
from django.db.models import Sum
from django.utils.text import slugify
from simple_history.models import HistoricalRecords


def split_variant_name(name):
    """
    Split a variant name into its ``(color, size)`` tokens.

    Variant names follow the "<color>-<size>" convention, e.g. "Red-Large".
    Missing segments come back as empty strings.
    """
    parts = (name or '').split('-')
    while parts and not parts[-1].strip():
        parts.pop()
    color = parts[0].strip() if parts else ''
    size = parts[1].strip() if len(parts) > 1 else ''
    return color, size


def _collect_tokens(names, position):
    tokens = []
    for name in names:
        token = split_variant_name(name)[position]
        if token and token not in tokens:
            tokens.append(token)
    return tokens


def collect_colors(names):
    """Unique colors found in ``names``, in the order they were first seen."""
    return _collect_tokens(names, 0)


def collect_sizes(names):
    """Unique sizes found in ``names``, in the order they were first seen."""
    return _collect_tokens(names, 1)


class ProductKind(models.TextChoices):
    STANDALONE = 'standalone', 'Avulso'
    ROOT = 'root', 'Principal'
    VARIANT = 'variant', 'Variante'


class ProductQuerySet(models.QuerySet):

    def active(self):
        return self.filter(active=True)

    def default(self):
        return self.filter(default=True)

    def roots(self):
        return self.filter(parent__isnull=True)

    def only_variants(self):
        return self.filter(parent__isnull=False)

    def default_variants(self):
        return self.default().only_variants()

    def name_contains(self, value):
        # Case-insensitive, like SQL LIKE '%value%' on the default collations.
        return self.filter(name__icontains=value)

    def search_by_color(self, color):
        return self.name_contains(color)

    def search_by_size(self, size):
        return self.name_contains(size)

    def in_category(self, category_id):
        return self.filter(product_categories__id=category_id)

    def find_exact(self, color, size):
        """First product (by id) whose name contains "<color>-<size>"."""
        return self.name_contains(f'{color}-{size}').order_by('pk').first()

    def search_filters(self, category_id=None, color=None, size=None):
        """
        Catalog search used by the storefront listing.

        With a category the base set is every product of that category,
        otherwise every active product. Color and size narrow the base set;
        missing filters are ignored.
        """
        if category_id:
            products = self.in_category(category_id)
        else:
            products = self.active()

        if color:
            products = products.search_by_color(color)
        if size:
            products = products.search_by_size(size)
        return products

    def without_parents(self):
        """
        Products that are nobody's parent (standalone products and variants).

        Falls back to every active product when no product has variants.
        """
        parent_ids = self.filter(variants__isnull=False).values('pk')
        if parent_ids.exists():
            return self.exclude(pk__in=parent_ids)
        return self.active()

    def all_colors(self):
        names = self.only_variants().order_by('pk').values_list('name', flat=True)
        return collect_colors(names)

    def all_sizes(self):
        names = self.only_variants().order_by('pk').values_list('name', flat=True)
        return collect_sizes(names)


class ProductManager(models.Manager.from_queryset(ProductQuerySet)):

    def create_with_categories(self, categories, **fields):
        """
        Validate and create a product together with its categories.

        Raises ``ValidationError`` carrying every field error, including the
        "at least one category" rule for root products.
        """
        categories = list(categories)
        product = self.model(**fields)

        errors = {}
        try:
            product.full_clean()
        except ValidationError as exc:
            errors = exc.update_error_dict(errors)
        if product.parent_id is None and not categories:
            errors.setdefault(NON_FIELD_ERRORS, []).append(
                'Must add at least one product category.'
            )
        if errors:
            raise ValidationError(errors)

        with transaction.atomic():
            product.save()
            product.product_categories.set(categories)
        return product


class Product(models.Model):
    """
    A catalog entry.

    A product without a parent is a root ("Phone X"); a product with a parent
    is one of its variants, named "<color>-<size>" ("Black-64GB"). Roots with
    variants delegate price and stock to their default variant.
    """
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='variants',
        verbose_name='Produto pai'
    )
    name = models.CharField(
        max_length=255,
        verbose_name='Nome'
    )
    permalink = models.SlugField(
        max_length=255,
        unique=True,
        verbose_name='Permalink'
    )
    sku = models.CharField(
        max_length=100,
        verbose_name='SKU'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    short_description = models.TextField(
        blank=True,
        verbose_name='Descrição curta'
    )
    in_the_box = models.TextField(
        blank=True,
        verbose_name='Conteúdo da embalagem'
    )
    weight = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        default=Decimal('0.000'),
        verbose_name='Peso (kg)'
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name='Preço'
    )
    cost_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Preço de custo'
    )
    tax_rate = models.ForeignKey(
        'catalog.TaxRate',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name='Alíquota'
    )
    product_categories = models.ManyToManyField(
        'catalog.ProductCategory',
        through='catalog.ProductCategorization',
        blank=True,
        related_name='products',
        verbose_name='Categorias'
    )

    # Flags
    active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )
    featured = models.BooleanField(
        default=False,
        verbose_name='Destaque'
    )
    default = models.BooleanField(
        default=False,
        verbose_name='Variante padrão'
    )
    stock_control = models.BooleanField(
        default=True,
        verbose_name='Controlar estoque'
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    history = HistoricalRecords()

    objects = ProductManager()

    class Meta:
        ordering = ['name']
        verbose_name = 'Produto'
        verbose_name_plural = 'Produtos'

    def __str__(self):
        return self.full_name

    def _ensure_permalink(self):
        if not self.permalink and isinstance(self.name, str):
            self.permalink = slugify(self.name)

    def full_clean(self, *args, **kwargs):
        self._ensure_permalink()
        super().full_clean(*args, **kwargs)

    def clean(self):
        errors = {}
        if self.parent_id is None:
            if not (self.description or '').strip():
                errors['description'] = 'This field is required for root products.'
            if not (self.short_description or '').strip():
                errors['short_description'] = 'This field is required for root products.'
            if self.pk and not self.product_categories.exists():
                errors[NON_FIELD_ERRORS] = 'Must add at least one product category.'
        else:
            if self.pk and self.parent_id == self.pk:
                errors['parent'] = 'A product cannot be its own parent.'
            elif self.parent.parent_id is not None:
                errors['parent'] = 'Variants cannot have variants of their own.'
        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        self._ensure_permalink()
        with transaction.atomic():
            super().save(*args, **kwargs)
            if self.parent_id:
                # Only one default variant per parent
                if self.default:
                    Product.objects.filter(
                        parent_id=self.parent_id,
                        default=True
                    ).exclude(pk=self.pk).update(default=False)
                # Stock is tracked on the variants once a parent has any
                Product.objects.filter(
                    pk=self.parent_id,
                    stock_control=True
                ).update(stock_control=False)

    # -------------------------------------------------------------------------
    # Root / variant role
    # -------------------------------------------------------------------------

    @property
    def is_variant(self):
        return self.parent_id is not None

    @property
    def has_variants(self):
        return self.pk is not None and self.variants.exists()

    @property
    def kind(self):
        if self.is_variant:
            return ProductKind.VARIANT
        if self.has_variants:
            return ProductKind.ROOT
        return ProductKind.STANDALONE

    @property
    def default_variant(self):
        """The variant flagged as default, or None (always None for variants)."""
        if self.is_variant or self.pk is None:
            return None
        return self.variants.default_variants().order_by('pk').first()

    @property
    def full_name(self):
        if self.parent_id:
            return f"{self.parent.name} ({self.name})"
        return self.name

    @property
    def color(self):
        return split_variant_name(self.name)[0]

    @property
    def size(self):
        return split_variant_name(self.name)[1]

    # -------------------------------------------------------------------------
    # Commerce facts
    # -------------------------------------------------------------------------

    @property
    def display_price(self):
        variant = self.default_variant
        return variant.price if variant else self.price

    @property
    def stock(self):
        """Sum of this product's own stock adjustments."""
        if self.pk is None:
            return 0
        total = self.stock_level_adjustments.aggregate(total=Sum('adjustment'))['total']
        return total or 0

    @property
    def in_stock(self):
        variant = self.default_variant
        if variant:
            return variant.in_stock
        if not self.stock_control:
            return True
        return self.stock > 0

    @property
    def orderable(self):
        if not self.active:
            return False
        if self.has_variants:
            return False
        return True

    def adjust_stock(self, adjustment, description=''):
        return self.stock_level_adjustments.create(
            adjustment=adjustment,
            description=description
        )

    # -------------------------------------------------------------------------
    # Content inherited from the parent
    # -------------------------------------------------------------------------

    def get_description(self):
        return self.parent.description if self.is_variant else self.description

    def get_short_description(self):
        return self.parent.short_description if self.is_variant else self.short_description

    def get_in_the_box(self):
        return self.parent.in_the_box if self.is_variant else self.in_the_box

    @property
    def product_category(self):
        """First category of the product (or of its parent for variants)."""
        owner = self.parent if self.is_variant else self
        if owner.pk is None:
            return None
        return owner.product_categories.order_by('pk').first()

    # -------------------------------------------------------------------------
    # Attachments
    # -------------------------------------------------------------------------

    @property
    def default_image(self):
        return self.attachments.for_role('default_image')

    @property
    def data_sheet(self):
        return self.attachments.for_role('data_sheet')

    def attach_files(self, default_image=None, data_sheet=None, extra=()):
        """Store uploaded files as attachments, one role per keyword."""
        created = []
        if default_image:
            created.append(self.attachments.create(file=default_image, role='default_image'))
        if data_sheet:
            created.append(self.attachments.create(file=data_sheet, role='data_sheet'))
        for file in extra:
            created.append(self.attachments.create(file=file, role='extra'))
        return created
