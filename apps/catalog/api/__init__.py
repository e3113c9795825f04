from .serializers import (
    ProductCategorySerializer,
    AttachmentSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
    ResolvedProductSerializer,
    BuySerializer,
    ProductImportSerializer,
)

__all__ = [
    'ProductCategorySerializer',
    'AttachmentSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
    'ResolvedProductSerializer',
    'BuySerializer',
    'ProductImportSerializer',
]
