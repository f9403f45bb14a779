from django.urls import path

from .views import (
    UserRegistrationView,
    LoginView,
    CurrentUserView,
    UserProfileView,
    ChangePasswordView,
    UserListView,
)

app_name = 'accounts'

urlpatterns = [
    # Authentication endpoints
    path('register', UserRegistrationView.as_view(), name='register'),
    path('login', LoginView.as_view(), name='login'),
    path('me', CurrentUserView.as_view(), name='me'),

    # User profile endpoints
    path('profile', UserProfileView.as_view(), name='profile'),
    path('change-password', ChangePasswordView.as_view(), name='change_password'),

    # User management endpoints
    path('users', UserListView.as_view(), name='user_list'),
]
