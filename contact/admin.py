"""
Contact Management Django Admin Configuration
"""
from django.contrib import admin
from django.utils.html import format_html
from .models import ContactMessage, ContactReply, ContactFormRateLimit


class ContactReplyInline(admin.TabularInline):
    model = ContactReply
    extra = 0
    readonly_fields = ['message', 'sent_by', 'sent_at']
    can_delete = False


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    """Admin interface for contact messages."""

    list_display = [
        'name', 'email', 'subject', 'project_type', 'status',
        'priority', 'is_spam', 'created_at', 'reply_count'
    ]

    list_filter = [
        'status', 'priority', 'project_type', 'is_spam', 'source', 'created_at'
    ]

    search_fields = [
        'name', 'email', 'subject', 'message', 'notes'
    ]

    readonly_fields = [
        'id', 'ip_address', 'user_agent', 'replied_at',
        'created_at', 'updated_at', 'reply_count_display'
    ]

    fieldsets = (
        ('Contact Information', {
            'fields': ('name', 'email', 'phone', 'company', 'subject', 'message')
        }),
        ('Project', {
            'fields': ('project_type', 'budget', 'timeline', 'source')
        }),
        ('Triage', {
            'fields': ('status', 'priority', 'notes', 'is_spam', 'replied_at')
        }),
        ('Security & Tracking', {
            'fields': ('ip_address', 'user_agent'),
            'classes': ('collapse',)
        }),
        ('Metadata', {
            'fields': ('id', 'created_at', 'updated_at', 'reply_count_display'),
            'classes': ('collapse',)
        }),
    )

    inlines = [ContactReplyInline]

    def reply_count(self, obj):
        """Number of replies."""
        return obj.replies.count()
    reply_count.short_description = 'Replies'

    def reply_count_display(self, obj):
        """Display number of replies with emphasis."""
        count = obj.replies.count()
        if count > 0:
            return format_html('<strong>{} replies</strong>', count)
        return '0 replies'
    reply_count_display.short_description = 'Replies'


@admin.register(ContactFormRateLimit)
class ContactFormRateLimitAdmin(admin.ModelAdmin):
    """Admin interface for rate limiting."""

    list_display = [
        'identifier', 'identifier_type', 'count',
        'window_start', 'last_submission'
    ]

    list_filter = [
        'identifier_type', 'window_start'
    ]

    search_fields = [
        'identifier'
    ]

    readonly_fields = [
        'identifier', 'identifier_type', 'count',
        'window_start', 'last_submission'
    ]

    def has_add_permission(self, request):
        """Disable manual creation."""
        return False
