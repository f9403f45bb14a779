"""
Blog list filters.
"""
import django_filters

from projects.filters import filter_json_list
from .models import BlogPost


class BlogPostFilter(django_filters.FilterSet):
    """
    Query parameters for the public blog list.

    - category: ``all`` disables the filter
    - tags: comma-separated, any of which may match
    - sort: newest (default), oldest, popular or featured
    """

    SORT_OPTIONS = {
        'newest': ['-published_at'],
        'oldest': ['published_at'],
        'popular': ['-views'],
        'featured': ['-featured', '-published_at'],
    }

    category = django_filters.CharFilter(method='filter_category')
    tags = django_filters.CharFilter(method='filter_tags')
    sort = django_filters.CharFilter(method='filter_sort')

    class Meta:
        model = BlogPost
        fields = ['category', 'tags', 'sort']

    def filter_category(self, queryset, name, value):
        if not value or value == 'all':
            return queryset
        return queryset.filter(category=value)

    def filter_tags(self, queryset, name, value):
        return filter_json_list(queryset, 'tags', value.split(','))

    def filter_sort(self, queryset, name, value):
        ordering = self.SORT_OPTIONS.get(value)
        if ordering:
            return queryset.order_by(*ordering)
        return queryset


class BlogPostAdminFilter(django_filters.FilterSet):
    """Query parameters for the admin blog list."""

    status = django_filters.ChoiceFilter(choices=BlogPost.STATUS_CHOICES)
    category = django_filters.ChoiceFilter(choices=BlogPost.CATEGORY_CHOICES)

    class Meta:
        model = BlogPost
        fields = ['status', 'category']
