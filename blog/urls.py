"""
Blog URL Configuration
"""
from django.urls import path
from .views import (
    BlogPostListView,
    FeaturedBlogPostsView,
    BlogPostAdminListView,
    BlogPostDetailView,
    BlogPostLikeView,
    BlogPostBySlugView,
)

app_name = 'blog'

urlpatterns = [
    path('blog', BlogPostListView.as_view(), name='list'),
    path('blog/featured', FeaturedBlogPostsView.as_view(), name='featured'),
    path('blog/admin/all', BlogPostAdminListView.as_view(), name='admin-list'),
    # Edits address posts by id, readers by slug
    path('blog/<uuid:pk>', BlogPostDetailView.as_view(), name='detail'),
    path('blog/<uuid:pk>/like', BlogPostLikeView.as_view(), name='like'),
    path('blog/<slug:slug>', BlogPostBySlugView.as_view(), name='by-slug'),
]
