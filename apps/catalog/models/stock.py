from django.db import models


class StockLevelAdjustment(models.Model):
    """
    Signed change to a product's stock. Rows are append-only; a product's
    stock is the sum of its adjustments.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='stock_level_adjustments',
        verbose_name='Produto'
    )
    adjustment = models.IntegerField(
        verbose_name='Ajuste'
    )
    description = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Descrição'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )

    class Meta:
        ordering = ['-created_at', '-pk']
        verbose_name = 'Ajuste de Estoque'
        verbose_name_plural = 'Ajustes de Estoque'

    def __str__(self):
        return f"{self.product.sku}: {self.adjustment:+d}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError('Stock level adjustments cannot be changed once recorded.')
        super().save(*args, **kwargs)
