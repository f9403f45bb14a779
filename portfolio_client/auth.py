"""
Session service: login, registration, profile and logout.

The service is the only writer of the token store.
"""

import logging
from typing import Any, Callable, Dict, Optional

from .api import ApiClient
from .exceptions import ApiError

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication calls against ``/auth``."""

    def __init__(self, api: ApiClient, on_logout: Optional[Callable[[], None]] = None):
        self.api = api
        self.store = api.token_store
        self.on_logout = on_logout

    def _persist(self, response: Dict[str, Any]) -> Dict[str, Any]:
        if response.get('success') and response.get('token'):
            self.store.set_token(response['token'])
            self.store.set_user(response['user'])
        return {'user': response.get('user'), 'token': response.get('token')}

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Log in and persist the token and user.

        Raises:
            AuthError: invalid credentials
            ValidationError: malformed input
        """
        response = self.api.post(
            '/auth/login', {'email': email, 'password': password}, anonymous=True
        )
        return self._persist(response)

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        """
        Create an account and log straight in.

        Raises:
            ValidationError: with ``field_errors`` from the server
        """
        response = self.api.post('/auth/register', {
            'name': name,
            'email': email,
            'password': password,
            'confirmPassword': password,
        }, anonymous=True)
        return self._persist(response)

    def logout(self) -> None:
        """Forget the credentials. No request is sent."""
        self.store.clear()
        if self.on_logout:
            self.on_logout()

    def get_profile(self) -> Dict[str, Any]:
        return self.api.get('/auth/me')['data']

    def update_profile(self, data: Dict[str, Any]) -> Dict[str, Any]:
        user = self.api.put('/auth/profile', data)['data']
        self.store.set_user(user)
        return user

    def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return self.api.post('/auth/change-password', {
            'currentPassword': current_password,
            'newPassword': new_password,
        })

    def get_users(self, page: Optional[int] = None, limit: Optional[int] = None,
                  search: Optional[str] = None) -> Dict[str, Any]:
        """Admin only. Returns ``{success, data, pagination}``."""
        params = {}
        if page:
            params['page'] = page
        if limit:
            params['limit'] = limit
        if search:
            params['search'] = search
        return self.api.get('/auth/users', params=params)

    def check_auth(self) -> Optional[Dict[str, Any]]:
        """
        Re-validate stored credentials.

        Returns the fresh user, or None when there is nothing stored or the
        server rejects it. Any failure clears the store.
        """
        token = self.store.get_token()
        user = self.store.get_user()
        if not (token and user):
            if token or user:
                self.store.clear()
            return None

        try:
            user = self.get_profile()
        except ApiError as e:
            logger.info(f"Stored session rejected: {e.message}")
            self.store.clear()
            return None

        self.store.set_user(user)
        return user

    def is_authenticated(self) -> bool:
        return bool(self.store.get_token())

    def get_current_user(self) -> Optional[Dict[str, Any]]:
        return self.store.get_user()

    def get_token(self) -> Optional[str]:
        return self.store.get_token()

    def is_admin(self, user: Optional[Dict[str, Any]] = None) -> bool:
        user = user if user is not None else self.get_current_user()
        return bool(user) and user.get('role') == 'admin'
