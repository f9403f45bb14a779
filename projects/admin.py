"""
Projects & Skills Django Admin Configuration
"""
from django.contrib import admin
from .models import Project, Skill


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin interface for projects."""

    list_display = [
        'title', 'category', 'status', 'featured', 'priority',
        'is_public', 'views', 'likes', 'created_at'
    ]

    list_filter = ['category', 'status', 'featured', 'is_public']

    search_fields = ['title', 'description', 'short_description']

    readonly_fields = ['id', 'views', 'likes', 'created_at', 'updated_at']

    fieldsets = (
        ('Project', {
            'fields': ('title', 'short_description', 'description', 'category', 'status')
        }),
        ('Details', {
            'fields': ('technologies', 'tags', 'images', 'challenges', 'solutions',
                       'duration', 'team_size')
        }),
        ('Links', {
            'fields': ('demo_url', 'github_url', 'website_url')
        }),
        ('Visibility', {
            'fields': ('is_public', 'featured', 'priority', 'author')
        }),
        ('Metadata', {
            'fields': ('id', 'views', 'likes', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(Skill)
class SkillAdmin(admin.ModelAdmin):
    """Admin interface for skills."""

    list_display = ['name', 'category', 'proficiency', 'experience', 'order', 'is_visible']
    list_filter = ['category', 'experience', 'is_visible']
    list_editable = ['order', 'is_visible']
    search_fields = ['name', 'description']
    filter_horizontal = ['projects']
