from dataclasses import asdict

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.catalog.exceptions import ImportFormatError, ProductImportError, ProductNotFound
from apps.catalog.models import Product, ProductCategory
from apps.catalog.services import CatalogResolver, ProductImportService
from apps.orders.api.serializers import OrderSerializer
from apps.orders.exceptions import UnorderableItem
from apps.orders.session import current_order
from .filters import ProductFilter
from .serializers import (
    BuySerializer,
    ProductCategorySerializer,
    ProductImportSerializer,
    ProductListSerializer,
    ResolvedProductSerializer,
)


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for the storefront catalog.

    list: Paginated listing, filtered by category, color and size
    retrieve: Product page resolved to a variant, optionally by color
    buy: Add the selected variant to the session's current order
    """
    queryset = Product.objects.all()
    serializer_class = ProductListSerializer
    lookup_field = 'permalink'
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter

    def retrieve(self, request, permalink=None):
        resolution = CatalogResolver.resolve_for_display(
            permalink,
            color=request.query_params.get('color') or None
        )
        if resolution is None:
            return Response(
                {'error': 'Product not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        serializer = ResolvedProductSerializer(resolution, context=self.get_serializer_context())
        return Response(serializer.data)

    @action(detail=True, methods=['post'])
    def buy(self, request, permalink=None):
        """
        Add a product to the current order.

        Expected payload:
        {
            "color": "Black",
            "size": "64GB",
            "quantity": 2
        }
        """
        serializer = BuySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            product = CatalogResolver.resolve_for_purchase(
                permalink,
                color=data.get('color') or None,
                size=data.get('size') or None
            )
        except ProductNotFound:
            return Response(
                {'error': 'Product not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        if product is None:
            return Response(
                {'error': 'No variant matches the selected options'},
                status=status.HTTP_404_NOT_FOUND
            )

        # Only start an order once there is something to put in it
        if not product.orderable:
            return Response(
                {'error': str(UnorderableItem(product))},
                status=status.HTTP_400_BAD_REQUEST
            )

        order = current_order(request)
        try:
            order.add_item(product, data['quantity'])
        except UnorderableItem as e:
            return Response(
                {'error': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(OrderSerializer(order, context=self.get_serializer_context()).data)

    @action(detail=False, methods=['get'], url_path='filters')
    def search_options(self, request):
        """Colors, sizes and categories for the listing's filter controls."""
        return Response({
            'colors': CatalogResolver.all_colors(),
            'sizes': CatalogResolver.all_sizes(),
            'categories': ProductCategorySerializer(
                ProductCategory.objects.all(), many=True
            ).data,
        })

    @action(
        detail=False,
        methods=['post'],
        url_path='import',
        permission_classes=[IsAdminUser],
        parser_classes=[MultiPartParser, FormParser]
    )
    def import_products(self, request):
        """Import products from an uploaded .csv, .xls or .xlsx file."""
        serializer = ProductImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = ProductImportService.import_file(serializer.validated_data['file'])
        except ImportFormatError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except ProductImportError as e:
            return Response(
                {'error': str(e), 'row': e.row_number, 'messages': e.messages},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(asdict(result), status=status.HTTP_201_CREATED)
