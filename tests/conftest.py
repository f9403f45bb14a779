"""
Fixtures for the client package tests.

``RequestsClient`` routes the client's ``requests`` calls into the Django
app in-process, so the end-to-end tests exercise the real endpoints.
"""
import pytest
import requests
from rest_framework.test import RequestsClient

from portfolio_client import (
    ApiClient,
    AuthService,
    ContactService,
    MemoryTokenStore,
    Session,
    UploadService,
)

TEST_BASE_URL = 'http://testserver/api'


class FakeSession:
    """Stands in for requests.Session and records every request."""

    def __init__(self, responses=None):
        self.calls = []
        self.responses = list(responses or [])

    def request(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_response(status_code=200, content=b'{"success": true}', headers=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = content
    response.headers.update(headers or {})
    return response


@pytest.fixture
def notices():
    """(message, error) pairs passed to the client notifier."""
    return []


@pytest.fixture
def make_api(notices):
    def factory(store=None, session=None):
        return ApiClient(
            base_url=TEST_BASE_URL,
            token_store=store if store is not None else MemoryTokenStore(),
            session=session or RequestsClient(),
            notifier=lambda message, error: notices.append((message, error)),
        )
    return factory


@pytest.fixture
def api(db, make_api):
    return make_api()


@pytest.fixture
def auth(api):
    return AuthService(api)


@pytest.fixture
def session(auth):
    return Session(auth)


@pytest.fixture
def admin_api(make_api, site_admin):
    """API client logged in as the site admin through the login endpoint."""
    api = make_api()
    AuthService(api).login(site_admin.email, 'Password123')
    return api


@pytest.fixture
def admin_contacts(admin_api):
    return ContactService(admin_api)


@pytest.fixture
def public_contacts(api):
    return ContactService(api)


@pytest.fixture
def admin_uploads(admin_api):
    return UploadService(admin_api)
