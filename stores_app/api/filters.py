from rest_framework.filters import BaseFilterBackend, SearchFilter


class SubstringSearchFilter(SearchFilter):
    """
    `?search=` filter matching the whole term as a case-insensitive substring.

    DRF's `SearchFilter` splits the term on whitespace and requires every word to match; here
    "Main Street" must appear as-is in one of the view's `search_fields`.
    """

    def get_search_terms(self, request):
        params = request.query_params.get(self.search_param, '')
        params = params.replace('\x00', '').strip()
        return [params] if params else []


class SortFilter(BaseFilterBackend):
    """
    Ordering controlled by `?sortBy=<field>&sortOrder=<asc|desc>`.

    The view declares the allowed fields in `sort_fields` and the fallback in `default_sort`.
    Unknown fields or directions are not an error: they silently fall back to the default
    field and ascending order.
    """
    sort_param = 'sortBy'
    order_param = 'sortOrder'
    default_order = 'asc'

    def get_sort(self, request, view):
        default_sort = getattr(view, 'default_sort', 'name')
        sort_fields = getattr(view, 'sort_fields', (default_sort,))

        sort_by = request.query_params.get(self.sort_param, default_sort)
        if sort_by not in sort_fields:
            sort_by = default_sort

        sort_order = request.query_params.get(self.order_param, self.default_order).lower()
        if sort_order not in ('asc', 'desc'):
            sort_order = self.default_order

        return sort_by, sort_order

    def filter_queryset(self, request, queryset, view):
        sort_by, sort_order = self.get_sort(request, view)
        if sort_order == 'desc':
            return queryset.order_by(f'-{sort_by}')
        return queryset.order_by(sort_by)
