"""
Service resolving storefront requests into concrete products.

A request names a root product by permalink and may narrow it with a color
and/or a size. Variants encode both in their name ("Black-64GB"), so all
narrowing is substring matching on variant names. Narrowing never raises:
a miss keeps the current product (display) or yields None (purchase).
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from apps.catalog.exceptions import ProductNotFound
from apps.catalog.models import Product, collect_colors, collect_sizes

logger = logging.getLogger(__name__)


@dataclass
class ResolvedProduct:
    """
    Outcome of a display lookup.

    ``selection_matched`` is None when no color was requested, True when the
    color selected a sibling variant and False when it matched nothing and
    the current product was kept.
    """
    product: Product
    root: Product
    available_colors: List[str] = field(default_factory=list)
    available_sizes: List[str] = field(default_factory=list)
    used_fallback_variant: bool = False
    selection_matched: Optional[bool] = None


class CatalogResolver:
    """
    Stateless lookups behind the product list, detail and buy endpoints.
    First matches are always taken in ascending id order.
    """

    @staticmethod
    def find_root(permalink: str) -> Optional[Product]:
        if not permalink:
            return None
        return Product.objects.active().roots().filter(permalink=permalink).first()

    @staticmethod
    def siblings(product: Product) -> QuerySet:
        """
        Variants of the product's family: the parent's variants for a
        variant, the product's own variants for a root, nothing otherwise.
        """
        if product.is_variant:
            return Product.objects.filter(parent_id=product.parent_id).order_by('pk')
        if product.has_variants:
            return product.variants.order_by('pk')
        return Product.objects.none()

    @staticmethod
    def color_variants(product: Product, color: str) -> QuerySet:
        """Siblings whose name contains ``color``; empty when nothing matches."""
        if not color:
            return Product.objects.none()
        return CatalogResolver.siblings(product).name_contains(color)

    @staticmethod
    def available_colors(product: Product) -> List[str]:
        names = CatalogResolver.siblings(product).values_list('name', flat=True)
        return collect_colors(names)

    @staticmethod
    def available_sizes(product: Product) -> List[str]:
        names = CatalogResolver.siblings(product).values_list('name', flat=True)
        return collect_sizes(names)

    @staticmethod
    def resolve_for_display(permalink: str, color: Optional[str] = None) -> Optional[ResolvedProduct]:
        """
        Resolve the product shown on a detail page.

        Roots with variants always descend to a variant: the default one, or
        the first variant when none is flagged (inconsistent catalog, logged).
        Returns None when no active root has this permalink.
        """
        root = CatalogResolver.find_root(permalink)
        if root is None:
            return None

        product = root
        used_fallback = False
        if root.has_variants:
            product = root.default_variant
            if product is None:
                product = root.variants.order_by('pk').first()
                used_fallback = True
                logger.warning(
                    "Product %s (%s) has variants but none is flagged default; using variant %s",
                    root.pk, root.permalink, product.pk,
                )

        selection_matched = None
        if product.is_variant and color:
            match = CatalogResolver.color_variants(product, color).first()
            selection_matched = match is not None
            if match is not None:
                product = match

        return ResolvedProduct(
            product=product,
            root=root,
            available_colors=CatalogResolver.available_colors(product),
            available_sizes=CatalogResolver.available_sizes(product),
            used_fallback_variant=used_fallback,
            selection_matched=selection_matched,
        )

    @staticmethod
    def resolve_for_purchase(
        permalink: str,
        color: Optional[str] = None,
        size: Optional[str] = None
    ) -> Optional[Product]:
        """
        Resolve the product to add to an order.

        Raises ProductNotFound for an unknown or inactive permalink. Returns
        None when the color/size selection matches no variant of the product.
        """
        product = CatalogResolver.find_root(permalink)
        if product is None:
            raise ProductNotFound(permalink)

        if color and size:
            return CatalogResolver.siblings(product).find_exact(color, size)
        if color:
            return CatalogResolver.color_variants(product, color).first()
        return product

    @staticmethod
    def search(category_id=None, color=None, size=None) -> QuerySet:
        return Product.objects.search_filters(category_id=category_id, color=color, size=size)

    @staticmethod
    def all_colors() -> List[str]:
        return Product.objects.all_colors()

    @staticmethod
    def all_sizes() -> List[str]:
        return Product.objects.all_sizes()

    @staticmethod
    def without_parents() -> QuerySet:
        return Product.objects.without_parents()

    @staticmethod
    def parse_quantity(value) -> int:
        """Quantity requested by the buyer; 1 when unspecified."""
        if value is None or value == '':
            return 1
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValidationError({'quantity': 'A valid integer is required.'})
        try:
            quantity = int(value)
        except (TypeError, ValueError):
            raise ValidationError({'quantity': 'A valid integer is required.'})
        if quantity < 1:
            raise ValidationError({'quantity': 'Ensure this value is greater than or equal to 1.'})
        return quantity
