from decimal import Decimal

from django.test import TestCase
from django.utils.text import slugify

from apps.catalog.models import Product, ProductCategory


class CatalogTestCase(TestCase):
    """
    Base fixture: one category plus helpers to build roots and variants.
    """

    @classmethod
    def setUpTestData(cls):
        cls.category = ProductCategory.objects.create(name='Smartphones')

    @classmethod
    def make_root(cls, name, categories=None, **fields):
        defaults = {
            'sku': slugify(name).upper(),
            'description': f'{name} description',
            'short_description': f'{name} in short',
            'price': Decimal('100.00'),
        }
        defaults.update(fields)
        if categories is None:
            categories = [cls.category]
        return Product.objects.create_with_categories(categories, name=name, **defaults)

    @classmethod
    def make_variant(cls, parent, name, **fields):
        defaults = {
            'sku': f'{parent.sku}-{name}',
            'permalink': slugify(f'{parent.permalink}-{name}'),
            'price': Decimal('100.00'),
        }
        defaults.update(fields)
        return Product.objects.create(parent=parent, name=name, **defaults)
