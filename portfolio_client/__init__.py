"""
Python client for the Portfolio API.

    from portfolio_client import ApiClient, AuthService, Session, FileTokenStore

    api = ApiClient('https://example.com/api', token_store=FileTokenStore('~/.portfolio/session.json'))
    session = Session(AuthService(api))
    session.check_auth()
"""

from .api import ApiClient, DEFAULT_BASE_URL
from .auth import AuthService
from .blog import BlogService, format_blog_for_display
from .contact import ContactService, format_contact_for_display
from .exceptions import (
    ApiError,
    AuthError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from .projects import ProjectService, SkillService
from .session import Session, SessionState, SessionStatus, transition
from .storage import FileTokenStore, MemoryTokenStore, TokenStore
from .upload import UploadFile, UploadService, validate_file

__all__ = [
    'ApiClient',
    'DEFAULT_BASE_URL',
    'AuthService',
    'BlogService',
    'format_blog_for_display',
    'ContactService',
    'format_contact_for_display',
    'ApiError',
    'AuthError',
    'NetworkError',
    'NotFoundError',
    'PermissionDeniedError',
    'RateLimitError',
    'ServerError',
    'ValidationError',
    'ProjectService',
    'SkillService',
    'Session',
    'SessionState',
    'SessionStatus',
    'transition',
    'FileTokenStore',
    'MemoryTokenStore',
    'TokenStore',
    'UploadFile',
    'UploadService',
    'validate_file',
]
