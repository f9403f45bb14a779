"""
Contact Management URL Configuration
"""
from django.urls import path
from .views import (
    ContactMessageListView,
    ContactMessageDetailView,
    ContactStatusUpdateView,
    ContactMessageReplyView,
    ContactMarkSpamView,
    ContactStatsView
)

app_name = 'contact'

urlpatterns = [
    # Public submission (POST) and admin list (GET)
    path('contact', ContactMessageListView.as_view(), name='list'),

    # Admin URLs (auth required)
    path('contact/stats', ContactStatsView.as_view(), name='stats'),
    path('contact/<uuid:pk>', ContactMessageDetailView.as_view(), name='detail'),
    path('contact/<uuid:pk>/status', ContactStatusUpdateView.as_view(), name='status'),
    path('contact/<uuid:pk>/reply', ContactMessageReplyView.as_view(), name='reply'),
    path('contact/<uuid:pk>/spam', ContactMarkSpamView.as_view(), name='spam'),
]
