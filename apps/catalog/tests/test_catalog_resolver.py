"""
Tests for CatalogResolver: display and purchase resolution, color/size
selectors and catalog search.
"""
from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from apps.catalog.exceptions import ProductNotFound
from apps.catalog.models import Product, ProductCategory
from apps.catalog.services import CatalogResolver
from .base import CatalogTestCase


class ResolverTestCase(CatalogTestCase):
    """
    Catalog with:
    - phone: variants Black-64GB (default), Black-128GB, White-64GB, White-128GB
    - tshirt: variants Red-Large, Blue-Small, Red-Small, none flagged default
    - mug: standalone
    - old-phone: inactive root
    """

    @classmethod
    def setUpTestData(cls):
        super().setUpTestData()
        cls.phone = cls.make_root('Phone', permalink='phone')
        cls.black_64 = cls.make_variant(cls.phone, 'Black-64GB', default=True)
        cls.black_128 = cls.make_variant(cls.phone, 'Black-128GB')
        cls.white_64 = cls.make_variant(cls.phone, 'White-64GB')
        cls.white_128 = cls.make_variant(cls.phone, 'White-128GB')

        cls.apparel = ProductCategory.objects.create(name='Apparel')
        cls.tshirt = cls.make_root('T-Shirt', permalink='tshirt', categories=[cls.apparel])
        cls.red_large = cls.make_variant(cls.tshirt, 'Red-Large')
        cls.blue_small = cls.make_variant(cls.tshirt, 'Blue-Small')
        cls.red_small = cls.make_variant(cls.tshirt, 'Red-Small')

        cls.mug = cls.make_root('Mug', permalink='mug')
        cls.old_phone = cls.make_root('Old Phone', permalink='old-phone', active=False)


class ResolveForDisplayTests(ResolverTestCase):
    def test_root_descends_to_default_variant(self):
        resolution = CatalogResolver.resolve_for_display('phone')
        self.assertEqual(resolution.product, self.black_64)
        self.assertEqual(resolution.root, self.phone)
        self.assertFalse(resolution.used_fallback_variant)
        self.assertIsNone(resolution.selection_matched)

    def test_available_colors_and_sizes(self):
        resolution = CatalogResolver.resolve_for_display('phone')
        self.assertEqual(resolution.available_colors, ['Black', 'White'])
        self.assertEqual(resolution.available_sizes, ['64GB', '128GB'])

    def test_color_selects_first_matching_sibling(self):
        resolution = CatalogResolver.resolve_for_display('phone', color='White')
        self.assertEqual(resolution.product, self.white_64)
        self.assertTrue(resolution.selection_matched)

    def test_color_match_is_case_insensitive(self):
        resolution = CatalogResolver.resolve_for_display('phone', color='white')
        self.assertEqual(resolution.product, self.white_64)

    def test_unmatched_color_keeps_current_variant(self):
        resolution = CatalogResolver.resolve_for_display('phone', color='Green')
        self.assertEqual(resolution.product, self.black_64)
        self.assertFalse(resolution.selection_matched)

    def test_missing_default_falls_back_to_first_variant(self):
        with self.assertLogs('apps.catalog.services.catalog_resolver', level='WARNING') as logs:
            resolution = CatalogResolver.resolve_for_display('tshirt')
        self.assertEqual(resolution.product, self.red_large)
        self.assertTrue(resolution.used_fallback_variant)
        self.assertIn('tshirt', logs.output[0])

    def test_standalone_product_is_returned_as_is(self):
        resolution = CatalogResolver.resolve_for_display('mug', color='Red')
        self.assertEqual(resolution.product, self.mug)
        self.assertEqual(resolution.available_colors, [])
        self.assertEqual(resolution.available_sizes, [])
        self.assertIsNone(resolution.selection_matched)

    def test_not_found(self):
        self.assertIsNone(CatalogResolver.resolve_for_display('nope'))
        self.assertIsNone(CatalogResolver.resolve_for_display(''))

    def test_inactive_root_is_not_found(self):
        self.assertIsNone(CatalogResolver.resolve_for_display('old-phone'))

    def test_variant_permalink_is_not_a_root(self):
        self.assertIsNone(CatalogResolver.resolve_for_display(self.black_64.permalink))

    def test_never_returns_product_with_variants(self):
        for root in Product.objects.active().roots():
            resolution = CatalogResolver.resolve_for_display(root.permalink)
            self.assertFalse(resolution.product.has_variants, root.permalink)


class ResolveForPurchaseTests(ResolverTestCase):
    def test_color_and_size_select_exact_variant(self):
        product = CatalogResolver.resolve_for_purchase('phone', color='Black', size='64GB')
        self.assertEqual(product, self.black_64)

        product = CatalogResolver.resolve_for_purchase('phone', color='White', size='128GB')
        self.assertEqual(product, self.white_128)

    def test_unmatched_color_and_size_returns_none(self):
        self.assertIsNone(
            CatalogResolver.resolve_for_purchase('phone', color='Green', size='64GB')
        )

    def test_exact_match_is_scoped_to_the_product_family(self):
        tablet = self.make_root('Tablet', permalink='tablet')
        tablet_black = self.make_variant(tablet, 'Black-64GB')

        self.assertEqual(
            CatalogResolver.resolve_for_purchase('tablet', color='Black', size='64GB'),
            tablet_black
        )
        self.assertEqual(
            CatalogResolver.resolve_for_purchase('phone', color='Black', size='64GB'),
            self.black_64
        )

    def test_color_only_selects_first_matching_variant(self):
        product = CatalogResolver.resolve_for_purchase('phone', color='White')
        self.assertEqual(product, self.white_64)

    def test_unmatched_color_returns_none(self):
        self.assertIsNone(CatalogResolver.resolve_for_purchase('phone', color='Green'))

    def test_color_on_standalone_product_returns_none(self):
        self.assertIsNone(CatalogResolver.resolve_for_purchase('mug', color='Red'))

    def test_size_without_color_returns_product_unchanged(self):
        self.assertEqual(CatalogResolver.resolve_for_purchase('phone', size='64GB'), self.phone)

    def test_no_selectors_returns_product(self):
        self.assertEqual(CatalogResolver.resolve_for_purchase('mug'), self.mug)

    def test_unknown_permalink_raises(self):
        with self.assertRaises(ProductNotFound):
            CatalogResolver.resolve_for_purchase('nope')

    def test_inactive_product_raises(self):
        with self.assertRaises(ProductNotFound):
            CatalogResolver.resolve_for_purchase('old-phone', color='Black', size='64GB')


class ColorVariantsTests(ResolverTestCase):
    def test_siblings_containing_color(self):
        variants = CatalogResolver.color_variants(self.white_128, 'Black')
        self.assertEqual(list(variants), [self.black_64, self.black_128])

    def test_from_root_uses_its_variants(self):
        variants = CatalogResolver.color_variants(self.tshirt, 'Red')
        self.assertEqual(list(variants), [self.red_large, self.red_small])

    def test_only_siblings_are_returned(self):
        for variant in CatalogResolver.color_variants(self.black_64, 'Black'):
            self.assertEqual(variant.parent_id, self.phone.pk)
            self.assertIn('black', variant.name.lower())

    def test_no_match_is_empty_queryset(self):
        variants = CatalogResolver.color_variants(self.black_64, 'Green')
        self.assertIsInstance(variants, QuerySet)
        self.assertEqual(list(variants), [])

    def test_standalone_product_has_no_color_variants(self):
        self.assertEqual(list(CatalogResolver.color_variants(self.mug, 'Red')), [])


class AvailableOptionsTests(ResolverTestCase):
    def test_colors_are_deduplicated_in_discovery_order(self):
        self.assertEqual(CatalogResolver.available_colors(self.blue_small), ['Red', 'Blue'])
        self.assertEqual(CatalogResolver.available_sizes(self.blue_small), ['Large', 'Small'])

    def test_badly_named_variant_does_not_add_empty_size(self):
        self.make_variant(self.tshirt, 'Green')
        self.assertEqual(CatalogResolver.available_colors(self.tshirt), ['Red', 'Blue', 'Green'])
        self.assertNotIn('', CatalogResolver.available_sizes(self.tshirt))

    def test_all_colors_and_sizes_scan_every_variant(self):
        self.assertEqual(CatalogResolver.all_colors(), ['Black', 'White', 'Red', 'Blue'])
        self.assertEqual(CatalogResolver.all_sizes(), ['64GB', '128GB', 'Large', 'Small'])


class SearchTests(ResolverTestCase):
    @classmethod
    def setUpTestData(cls):
        super().setUpTestData()
        cls.red_cap = cls.make_root('Red Cap', permalink='red-cap', categories=[cls.apparel])

    def test_without_filters_returns_active_products(self):
        results = CatalogResolver.search()
        self.assertIn(self.mug, results)
        self.assertIn(self.black_64, results)
        self.assertNotIn(self.old_phone, results)

    def test_category_base_set(self):
        results = set(CatalogResolver.search(category_id=self.apparel.pk))
        self.assertEqual(results, {self.tshirt, self.red_cap})

    def test_color_narrows_category(self):
        base = set(CatalogResolver.search(category_id=self.apparel.pk))
        narrowed = set(CatalogResolver.search(category_id=self.apparel.pk, color='Red'))
        self.assertTrue(narrowed <= base)
        self.assertEqual(narrowed, {self.red_cap})

    def test_color_and_size_compose(self):
        results = set(CatalogResolver.search(color='Black', size='128'))
        self.assertEqual(results, {self.black_128})

    def test_unknown_category_is_empty(self):
        self.assertEqual(list(CatalogResolver.search(category_id=999999)), [])

    def test_without_parents_excludes_roots_with_variants(self):
        results = set(CatalogResolver.without_parents())
        self.assertNotIn(self.phone, results)
        self.assertNotIn(self.tshirt, results)
        self.assertIn(self.mug, results)
        self.assertIn(self.white_64, results)


class WithoutParentsFallbackTests(CatalogTestCase):
    def test_falls_back_to_active_products(self):
        mug = self.make_root('Mug')
        self.make_root('Old Mug', active=False)
        self.assertEqual(list(CatalogResolver.without_parents()), [mug])


class ParseQuantityTests(CatalogTestCase):
    def test_defaults_to_one(self):
        self.assertEqual(CatalogResolver.parse_quantity(None), 1)
        self.assertEqual(CatalogResolver.parse_quantity(''), 1)

    def test_parses_integers(self):
        self.assertEqual(CatalogResolver.parse_quantity('3'), 3)
        self.assertEqual(CatalogResolver.parse_quantity(4), 4)

    def test_rejects_invalid_values(self):
        for value in ('abc', '0', -2, 2.5, True):
            with self.assertRaises(ValidationError, msg=repr(value)):
                CatalogResolver.parse_quantity(value)
