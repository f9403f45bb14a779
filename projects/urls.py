"""
Project and Skill URL Configuration
"""
from django.urls import path
from .views import (
    ProjectListView,
    FeaturedProjectsView,
    ProjectAdminListView,
    ProjectDetailView,
    ProjectLikeView,
    SkillListView,
    SkillAdminListView,
    SkillReorderView,
    SkillDetailView,
)

app_name = 'projects'

urlpatterns = [
    path('projects', ProjectListView.as_view(), name='project-list'),
    path('projects/featured', FeaturedProjectsView.as_view(), name='project-featured'),
    path('projects/admin/all', ProjectAdminListView.as_view(), name='project-admin-list'),
    path('projects/<uuid:pk>', ProjectDetailView.as_view(), name='project-detail'),
    path('projects/<uuid:pk>/like', ProjectLikeView.as_view(), name='project-like'),

    path('skills', SkillListView.as_view(), name='skill-list'),
    path('skills/admin/all', SkillAdminListView.as_view(), name='skill-admin-list'),
    path('skills/reorder', SkillReorderView.as_view(), name='skill-reorder'),
    path('skills/<uuid:pk>', SkillDetailView.as_view(), name='skill-detail'),
]
