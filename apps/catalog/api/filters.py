from django_filters import rest_framework as filters

from apps.catalog.models import Product


class ProductFilter(filters.FilterSet):
    """
    Storefront listing filters.

    Without any filter the listing shows products that are nobody's parent.
    With filters it becomes a catalog search: the category's products (or
    every active product) narrowed by color and size.
    """

    category = filters.NumberFilter(method='filter_category')
    color = filters.CharFilter(method='filter_color')
    size = filters.CharFilter(method='filter_size')

    class Meta:
        model = Product
        fields = ['category', 'color', 'size']

    def has_search_filters(self):
        return any(self.form.cleaned_data.get(name) for name in self.filters)

    def filter_queryset(self, queryset):
        if not self.has_search_filters():
            return queryset.without_parents().active()
        if not self.form.cleaned_data.get('category'):
            queryset = queryset.active()
        return super().filter_queryset(queryset)

    def filter_category(self, queryset, name, value):
        return queryset.in_category(value)

    def filter_color(self, queryset, name, value):
        return queryset.search_by_color(value)

    def filter_size(self, queryset, name, value):
        return queryset.search_by_size(value)
