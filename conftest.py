"""
Shared pytest fixtures.
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken


@pytest.fixture(autouse=True)
def clear_cache():
    """Clear cache before and after each test to prevent pollution."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def regular_user(db, django_user_model):
    return django_user_model.objects.create_user(
        email='jane@example.com',
        password='Password123',
        name='Jane Visitor',
    )


@pytest.fixture
def site_admin(db, django_user_model):
    return django_user_model.objects.create_user(
        email='owner@example.com',
        password='Password123',
        name='Site Owner',
        role='admin',
    )


def bearer_client(user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {AccessToken.for_user(user)}')
    return client


@pytest.fixture
def user_client(regular_user):
    return bearer_client(regular_user)


@pytest.fixture
def admin_client(site_admin):
    return bearer_client(site_admin)
