"""
Blog Django Admin Configuration
"""
from django.contrib import admin
from .models import BlogPost


@admin.register(BlogPost)
class BlogPostAdmin(admin.ModelAdmin):
    """Admin interface for blog posts."""

    list_display = [
        'title', 'category', 'status', 'featured', 'published_at',
        'views', 'like_count', 'read_time'
    ]

    list_filter = ['status', 'category', 'featured']

    search_fields = ['title', 'excerpt', 'content']

    prepopulated_fields = {'slug': ('title',)}

    readonly_fields = ['id', 'views', 'read_time', 'published_at', 'created_at', 'updated_at']

    def like_count(self, obj):
        return obj.like_count
    like_count.short_description = 'Likes'
