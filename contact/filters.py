"""
Contact list filters.
"""
import django_filters

from .models import ContactMessage


class ContactMessageFilter(django_filters.FilterSet):
    """
    Query parameters for the admin contact list.

    ``status=all`` disables the status filter; ``includeSpam=true`` shows
    messages flagged as spam, which are hidden otherwise.
    """

    status = django_filters.ChoiceFilter(
        choices=[('all', 'All')] + ContactMessage.STATUS_CHOICES,
        method='filter_status'
    )
    priority = django_filters.ChoiceFilter(choices=ContactMessage.PRIORITY_CHOICES)
    projectType = django_filters.ChoiceFilter(
        field_name='project_type',
        choices=ContactMessage.PROJECT_TYPE_CHOICES
    )
    includeSpam = django_filters.BooleanFilter(method='filter_include_spam')

    class Meta:
        model = ContactMessage
        fields = ['status', 'priority', 'projectType', 'includeSpam']

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        if not self.form.cleaned_data.get('includeSpam'):
            queryset = queryset.filter(is_spam=False)
        return queryset

    def filter_status(self, queryset, name, value):
        if not value or value == 'all':
            return queryset
        return queryset.filter(status=value)

    def filter_include_spam(self, queryset, name, value):
        # Applied in filter_queryset so the default (absent) hides spam too
        return queryset
