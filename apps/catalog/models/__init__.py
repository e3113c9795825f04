"""
Catalog models for the storefront.

Model Hierarchy:
- Product: Root product (e.g., "Phone X") or one of its variants
  (e.g., "Black-64GB"), linked through ``Product.parent``
- ProductCategory: Categories of root products
- StockLevelAdjustment: Append-only stock changes; stock is their sum
- Attachment: Files attached to a product by role
- TaxRate: Tax applied to a product's price
"""

from .product import Product, ProductKind, split_variant_name, collect_colors, collect_sizes
from .category import ProductCategory, ProductCategorization
from .stock import StockLevelAdjustment
from .attachment import Attachment
from .tax_rate import TaxRate

__all__ = [
    'Product',
    'ProductKind',
    'split_variant_name',
    'collect_colors',
    'collect_sizes',
    'ProductCategory',
    'ProductCategorization',
    'StockLevelAdjustment',
    'Attachment',
    'TaxRate',
]
