import logging
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models, transaction

from .exceptions import UnorderableItem

logger = logging.getLogger(__name__)


class Order(models.Model):
    """
    A customer's order. While ``building`` it is the session's current
    order and lines can still be added.
    """
    BUILDING = 'building'
    RECEIVED = 'received'
    STATUS_CHOICES = [
        (BUILDING, 'Em montagem'),
        (RECEIVED, 'Recebido'),
    ]

    status = models.CharField(
        max_length=16,
        choices=STATUS_CHOICES,
        default=BUILDING,
        verbose_name='Status'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Pedido'
        verbose_name_plural = 'Pedidos'

    def __str__(self):
        return f"Pedido #{self.pk} ({self.get_status_display()})"

    @property
    def is_building(self):
        return self.status == self.BUILDING

    def add_item(self, product, quantity=1):
        """
        Add ``quantity`` of ``product``, merging with an existing line.

        Raises UnorderableItem for inactive products and for roots whose
        variant has not been chosen.
        """
        if not product.orderable:
            raise UnorderableItem(product)

        with transaction.atomic():
            item = self.items.select_for_update().filter(product=product).first()
            if item is not None:
                item.quantity += quantity
                item.save(update_fields=['quantity'])
            else:
                item = self.items.create(
                    product=product,
                    quantity=quantity,
                    unit_price=product.price,
                    tax_rate=product.tax_rate.rate if product.tax_rate else Decimal('0.00'),
                )
        logger.debug("Order %s: %s x%s", self.pk, product.sku, item.quantity)
        return item

    @property
    def total_items(self):
        return sum(item.quantity for item in self.items.all())

    @property
    def sub_total(self):
        return sum((item.sub_total for item in self.items.all()), Decimal('0.00'))

    @property
    def tax(self):
        return sum((item.tax_amount for item in self.items.all()), Decimal('0.00'))

    @property
    def total(self):
        return self.sub_total + self.tax


class OrderItem(models.Model):
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name='Pedido'
    )
    # Products with order history can be deactivated but never deleted
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='order_items',
        verbose_name='Produto'
    )
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
        verbose_name='Quantidade'
    )
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        verbose_name='Preço unitário'
    )
    tax_rate = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        default=Decimal('0.00'),
        verbose_name='Alíquota (%)'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )

    class Meta:
        ordering = ['pk']
        verbose_name = 'Item do Pedido'
        verbose_name_plural = 'Itens do Pedido'

    def __str__(self):
        return f"{self.product} x{self.quantity}"

    @property
    def sub_total(self):
        return self.unit_price * self.quantity

    @property
    def tax_amount(self):
        return (self.sub_total * self.tax_rate / Decimal('100')).quantize(Decimal('0.01'))
