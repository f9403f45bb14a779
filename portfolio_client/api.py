"""
HTTP client for the portfolio API.

Adds the bearer token to every request and turns failed responses into the
exceptions in ``portfolio_client.exceptions``. Every failure is also passed
to a notifier so a user-facing message can be shown, whether or not the
caller handles the exception. Nothing is retried.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import requests

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
from .storage import MemoryTokenStore, TokenStore

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'http://localhost:8000/api'


def log_notification(message: str, error: ApiError) -> None:
    """Default notifier: write the user-facing message to the log."""
    logger.warning(f"{error.__class__.__name__}: {message}")


def parse_field_errors(payload: Dict[str, Any]) -> Dict[str, List[str]]:
    """Group ``errors: [{field, message}]`` by field."""
    field_errors = {}
    for error in payload.get('errors') or []:
        if not isinstance(error, dict):
            continue
        field = error.get('field') or 'non_field_errors'
        field_errors.setdefault(field, []).append(error.get('message', ''))
    return field_errors


def error_from_response(response: requests.Response) -> ApiError:
    """Map a failed response onto the client exception hierarchy."""
    try:
        payload = response.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    message = payload.get('message')
    status_code = response.status_code
    kwargs = {'status_code': status_code, 'payload': payload}

    if status_code in (400, 422):
        return ValidationError(message, field_errors=parse_field_errors(payload), **kwargs)
    if status_code == 401:
        return AuthError(message, **kwargs)
    if status_code == 403:
        return PermissionDeniedError(message, **kwargs)
    if status_code == 404:
        return NotFoundError(message, **kwargs)
    if status_code == 429:
        retry_after = response.headers.get('Retry-After') or payload.get('retry_after')
        try:
            retry_after = int(retry_after) if retry_after is not None else None
        except (TypeError, ValueError):
            retry_after = None
        return RateLimitError(message, retry_after=retry_after, **kwargs)
    return ServerError(message, **kwargs)


class ApiClient:
    """
    Thin ``requests`` wrapper shared by the services.

    Usage:
        api = ApiClient('https://example.com/api', token_store=FileTokenStore('~/.portfolio.json'))
        contacts = api.get('/contact', params={'status': 'new'})
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token_store: Optional[TokenStore] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        notifier: Optional[Callable[[str, ApiError], None]] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.token_store = token_store if token_store is not None else MemoryTokenStore()
        self.session = session or requests.Session()
        self.timeout = timeout
        self.notifier = notifier or log_notification
        self.on_unauthorized = on_unauthorized

    def _headers(self, anonymous: bool = False) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        token = None if anonymous else self.token_store.get_token()
        if token:
            headers['Authorization'] = f'Bearer {token}'
        return headers

    def _notify(self, error: ApiError, message: Optional[str] = None) -> None:
        self.notifier(message or error.notice, error)

    def _handle_error(self, error: ApiError, sent_token: bool) -> None:
        if isinstance(error, AuthError) and sent_token:
            # The stored token was rejected: the session is over
            self.token_store.clear()
            if self.on_unauthorized:
                self.on_unauthorized()
            self._notify(error)
        elif isinstance(error, ValidationError) and error.field_errors:
            messages = [message for field in error.field_errors.values() for message in field]
            self._notify(error, ' '.join(messages))
        elif isinstance(error, (AuthError, ValidationError)):
            self._notify(error, error.message)
        elif isinstance(error, ServerError) and error.status_code and error.status_code != 500:
            self._notify(error, error.message)
        else:
            self._notify(error)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Any = None,
        anonymous: bool = False,
    ) -> Dict[str, Any]:
        """
        Send a request and return the decoded JSON body.

        ``anonymous`` requests never carry the stored token, so a 401 on them
        is not treated as an expired session.

        Raises:
            ApiError: one of its subclasses, depending on what failed
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = self._headers(anonymous)
        sent_token = 'Authorization' in headers

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json,
                data=data,
                files=files,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Request timeout: {method} {path}")
            error = NetworkError(f"Request timed out after {self.timeout} seconds")
            self._handle_error(error, sent_token)
            raise error from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed: {method} {path}: {e}")
            error = NetworkError(str(e) or None)
            self._handle_error(error, sent_token)
            raise error from e

        if not response.ok:
            error = error_from_response(response)
            logger.info(f"{method} {path} failed with {response.status_code}: {error.message}")
            self._handle_error(error, sent_token)
            raise error

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            error = ServerError('Invalid response from server', status_code=response.status_code)
            self._handle_error(error, sent_token)
            raise error from e

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self.request('GET', path, params=params)

    def post(self, path: str, json: Any = None, anonymous: bool = False) -> Dict[str, Any]:
        return self.request('POST', path, json=json, anonymous=anonymous)

    def put(self, path: str, json: Any = None) -> Dict[str, Any]:
        return self.request('PUT', path, json=json)

    def patch(self, path: str, json: Any = None) -> Dict[str, Any]:
        return self.request('PATCH', path, json=json)

    def delete(self, path: str) -> Dict[str, Any]:
        return self.request('DELETE', path)

    def upload(self, path: str, files: Any, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """POST a multipart body; ``files`` is passed straight to requests."""
        return self.request('POST', path, data=data, files=files)
