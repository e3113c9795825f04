from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from apps.catalog.models import Attachment, Product, ProductCategory
from apps.catalog.services import CatalogResolver


# =============================================================================
# Category / Attachment Serializers
# =============================================================================

class ProductCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductCategory
        fields = ['id', 'name', 'slug', 'description']


class AttachmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Attachment
        fields = ['id', 'role', 'file', 'file_name', 'file_type', 'file_size']


# =============================================================================
# Product Serializers
# =============================================================================

class ProductListSerializer(serializers.ModelSerializer):
    """Product card for the storefront listing."""
    full_name = serializers.CharField(read_only=True)
    kind = serializers.CharField(read_only=True)
    short_description = serializers.CharField(source='get_short_description', read_only=True)
    display_price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    in_stock = serializers.BooleanField(read_only=True)
    orderable = serializers.BooleanField(read_only=True)
    default_image = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'full_name', 'permalink', 'sku', 'kind',
            'short_description', 'display_price', 'in_stock', 'orderable',
            'featured', 'default_image'
        ]

    def get_default_image(self, obj):
        image = obj.default_image
        if image is None:
            return None
        request = self.context.get('request')
        if request:
            return request.build_absolute_uri(image.file.url)
        return image.file.url


class ProductDetailSerializer(ProductListSerializer):
    """Full product page; variants show their parent's texts."""
    description = serializers.CharField(source='get_description', read_only=True)
    in_the_box = serializers.CharField(source='get_in_the_box', read_only=True)
    parent_permalink = serializers.CharField(source='parent.permalink', read_only=True, default=None)
    color = serializers.CharField(read_only=True)
    size = serializers.CharField(read_only=True)
    stock = serializers.IntegerField(read_only=True)
    categories = serializers.SerializerMethodField()
    attachments = AttachmentSerializer(many=True, read_only=True)

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + [
            'description', 'in_the_box', 'parent_permalink', 'color', 'size',
            'weight', 'stock', 'categories', 'attachments'
        ]

    def get_categories(self, obj):
        owner = obj.parent if obj.is_variant else obj
        return ProductCategorySerializer(owner.product_categories.all(), many=True).data


class ResolvedProductSerializer(serializers.Serializer):
    """Detail page payload: the resolved product plus its selectors."""
    product = ProductDetailSerializer(read_only=True)
    root_permalink = serializers.CharField(source='root.permalink', read_only=True)
    available_colors = serializers.ListField(child=serializers.CharField(), read_only=True)
    available_sizes = serializers.ListField(child=serializers.CharField(), read_only=True)
    used_fallback_variant = serializers.BooleanField(read_only=True)
    selection_matched = serializers.BooleanField(read_only=True, allow_null=True)


# =============================================================================
# Buy / Import Serializers
# =============================================================================

class BuySerializer(serializers.Serializer):
    color = serializers.CharField(required=False, allow_blank=True)
    size = serializers.CharField(required=False, allow_blank=True)
    quantity = serializers.CharField(default=None, allow_null=True, allow_blank=True)

    def validate_quantity(self, value):
        try:
            return CatalogResolver.parse_quantity(value)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.message_dict['quantity'])


class ProductImportSerializer(serializers.Serializer):
    file = serializers.FileField()
