"""
URL configuration for the Portfolio API.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include, re_path

from core.views import HealthCheckView, spa_index

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/health', HealthCheckView.as_view(), name='health-check'),
    path('api/auth/', include('accounts.urls')),
    path('api/', include('contact.urls')),
    path('api/', include('projects.urls')),
    path('api/', include('blog.urls')),
    path('api/upload/', include('uploads.urls')),
    # Client-side routes of the built frontend
    re_path(r'^(?!api/|admin/|static/)(?P<path>.*)$', spa_index, name='spa-index'),
]
