"""
Upload URL Configuration
"""
from django.urls import path
from .views import (
    ImageUploadView,
    MultipleImageUploadView,
    ImageListView,
    ImageTransformView,
    ImageDeleteView,
)

app_name = 'uploads'

urlpatterns = [
    path('image', ImageUploadView.as_view(), name='image'),
    path('multiple', MultipleImageUploadView.as_view(), name='multiple'),
    path('images', ImageListView.as_view(), name='images'),
    path('transform', ImageTransformView.as_view(), name='transform'),
    # Public IDs contain folder slashes
    path('<path:public_id>', ImageDeleteView.as_view(), name='delete'),
]
