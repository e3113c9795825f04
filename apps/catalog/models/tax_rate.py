from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class TaxRate(models.Model):
    name = models.CharField(
        max_length=100,
        verbose_name='Nome'
    )
    rate = models.DecimalField(
        max_digits=6,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Alíquota (%)'
    )

    class Meta:
        ordering = ['name']
        verbose_name = 'Alíquota'
        verbose_name_plural = 'Alíquotas'

    def __str__(self):
        return f"{self.name} ({self.rate}%)"
