"""Client-side errors raised for failed API calls"""

from typing import Dict, List, Optional


class ApiError(Exception):
    """Base exception for portfolio API calls"""

    notice = 'An unexpected error occurred.'

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        payload: Optional[dict] = None,
    ):
        self.message = message or self.notice
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(self.message)


class ValidationError(ApiError):
    """Rejected input, with messages per field"""

    notice = 'Validation failed.'

    def __init__(
        self,
        message: Optional[str] = None,
        field_errors: Optional[Dict[str, List[str]]] = None,
        status_code: Optional[int] = None,
        payload: Optional[dict] = None,
    ):
        self.field_errors = field_errors or {}
        super().__init__(message, status_code=status_code, payload=payload)


class AuthError(ApiError):
    """Missing, invalid or expired credentials (401)"""

    notice = 'Your session has expired. Please login again.'


class PermissionDeniedError(ApiError):
    """Authenticated but not allowed (403)"""

    notice = 'You do not have permission to perform this action.'


class NotFoundError(ApiError):
    """Resource does not exist (404)"""

    notice = 'The requested resource was not found.'


class RateLimitError(ApiError):
    """Too many requests (429)"""

    notice = 'Too many requests. Please try again later.'

    def __init__(self, message: Optional[str] = None, retry_after: Optional[int] = None, **kwargs):
        self.retry_after = retry_after
        super().__init__(message, **kwargs)


class ServerError(ApiError):
    """5xx or any response that could not be classified"""

    notice = 'Server error. Please try again later.'


class NetworkError(ApiError):
    """No response was received"""

    notice = 'Network error. Please check your internet connection.'
