"""
Project and skill list filters.
"""
import django_filters

from .models import Project, Skill


def filter_json_list(queryset, field, wanted):
    """
    Keep rows whose JSON list ``field`` shares a value with ``wanted``.

    Matching is case-insensitive and done in Python so it behaves the same
    on every database backend.
    """
    wanted = {value.strip().lower() for value in wanted if value.strip()}
    if not wanted:
        return queryset
    matching = [
        pk for pk, values in queryset.values_list('pk', field)
        if wanted & {str(value).lower() for value in values or []}
    ]
    return queryset.filter(pk__in=matching)


class ProjectFilter(django_filters.FilterSet):
    """
    Query parameters for the public project list.

    - category: ``all`` disables the filter
    - featured: ``true`` for featured projects only
    - status
    - tech: comma-separated technologies, any of which may match
    - sort: newest, oldest, popular or featured (default: priority, newest)
    """

    SORT_OPTIONS = {
        'newest': ['-created_at'],
        'oldest': ['created_at'],
        'popular': ['-views', '-likes'],
        'featured': ['-featured', '-priority'],
    }

    category = django_filters.CharFilter(method='filter_category')
    featured = django_filters.BooleanFilter(method='filter_featured')
    status = django_filters.ChoiceFilter(choices=Project.STATUS_CHOICES)
    tech = django_filters.CharFilter(method='filter_tech')
    sort = django_filters.CharFilter(method='filter_sort')

    class Meta:
        model = Project
        fields = ['category', 'featured', 'status', 'tech', 'sort']

    def filter_category(self, queryset, name, value):
        if not value or value == 'all':
            return queryset
        return queryset.filter(category=value)

    def filter_featured(self, queryset, name, value):
        if value:
            return queryset.filter(featured=True)
        return queryset

    def filter_tech(self, queryset, name, value):
        return filter_json_list(queryset, 'technologies', value.split(','))

    def filter_sort(self, queryset, name, value):
        ordering = self.SORT_OPTIONS.get(value)
        if ordering:
            return queryset.order_by(*ordering)
        return queryset


class ProjectAdminFilter(django_filters.FilterSet):
    """Query parameters for the admin project list."""

    category = django_filters.ChoiceFilter(choices=Project.CATEGORY_CHOICES)
    status = django_filters.ChoiceFilter(choices=Project.STATUS_CHOICES)

    class Meta:
        model = Project
        fields = ['category', 'status']


class SkillFilter(django_filters.FilterSet):
    """``category`` filter for skills; ``all`` disables it."""

    category = django_filters.CharFilter(method='filter_category')

    class Meta:
        model = Skill
        fields = ['category']

    def filter_category(self, queryset, name, value):
        if not value or value == 'all':
            return queryset
        return queryset.filter(category=value)
