from .catalog_resolver import CatalogResolver, ResolvedProduct
from .product_import import ProductImportService, ImportResult

__all__ = [
    'CatalogResolver',
    'ResolvedProduct',
    'ProductImportService',
    'ImportResult',
]
