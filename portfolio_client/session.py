"""
Session state machine.

The state is one of ``loading``, ``unauthenticated`` or ``authenticated``.
It only changes through ``transition(state, action)``. ``Session`` runs the
auth calls and feeds the results through it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .auth import AuthService

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    LOADING = 'loading'
    UNAUTHENTICATED = 'unauthenticated'
    AUTHENTICATED = 'authenticated'


@dataclass(frozen=True)
class SessionState:
    status: SessionStatus = SessionStatus.LOADING
    user: Optional[Dict[str, Any]] = None
    token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.token is not None

    @property
    def is_loading(self) -> bool:
        return self.status == SessionStatus.LOADING


# Actions

@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class LoginSucceeded:
    user: Dict[str, Any]
    token: str


@dataclass(frozen=True)
class LoggedOut:
    pass


@dataclass(frozen=True)
class UserUpdated:
    user: Dict[str, Any]


LOADING = SessionState(SessionStatus.LOADING)
UNAUTHENTICATED = SessionState(SessionStatus.UNAUTHENTICATED)


def transition(state: SessionState, action) -> SessionState:
    """Return the state that follows ``state`` after ``action``."""
    if isinstance(action, Loading):
        return LOADING
    if isinstance(action, LoginSucceeded):
        if action.user is None or not action.token:
            return UNAUTHENTICATED
        return SessionState(SessionStatus.AUTHENTICATED, action.user, action.token)
    if isinstance(action, LoggedOut):
        return UNAUTHENTICATED
    if isinstance(action, UserUpdated):
        if state.status != SessionStatus.AUTHENTICATED or action.user is None:
            return state
        return SessionState(SessionStatus.AUTHENTICATED, action.user, state.token)
    raise ValueError(f"Unknown session action: {action!r}")


class Session:
    """
    Session facade.

    Starts in ``loading``; call ``check_auth()`` to resolve it. A 401 on any
    request made through the shared API client logs the session out.

    Usage:
        session = Session(AuthService(api))
        session.subscribe(lambda state: print(state.status))
        session.check_auth()
        session.login('me@example.com', 'Secret123')
    """

    def __init__(self, auth: AuthService):
        self.auth = auth
        self._state = LOADING
        self._subscribers: List[Callable[[SessionState], None]] = []
        auth.api.on_unauthorized = self._expired

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, callback: Callable[[SessionState], None]) -> Callable[[], None]:
        """Call ``callback`` with the new state after each change. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def dispatch(self, action) -> SessionState:
        new_state = transition(self._state, action)
        if new_state != self._state:
            self._state = new_state
            for callback in list(self._subscribers):
                callback(new_state)
        return self._state

    def _expired(self):
        logger.info("Session expired, logging out")
        self.logout()

    def check_auth(self) -> SessionState:
        self.dispatch(Loading())
        user = self.auth.check_auth()
        if user:
            return self.dispatch(LoginSucceeded(user, self.auth.get_token()))
        return self.dispatch(LoggedOut())

    def _authenticate(self, call, *args) -> SessionState:
        previous = self._state
        self.dispatch(Loading())
        try:
            result = call(*args)
        except Exception:
            # The store is untouched by a failed login, so neither is the session
            if previous.is_authenticated:
                self.dispatch(LoginSucceeded(previous.user, previous.token))
            else:
                self.dispatch(LoggedOut())
            raise
        return self.dispatch(LoginSucceeded(result['user'], result['token']))

    def login(self, email: str, password: str) -> SessionState:
        return self._authenticate(self.auth.login, email, password)

    def register(self, name: str, email: str, password: str) -> SessionState:
        return self._authenticate(self.auth.register, name, email, password)

    def logout(self) -> SessionState:
        self.auth.logout()
        return self.dispatch(LoggedOut())

    def update_profile(self, data: Dict[str, Any]) -> SessionState:
        user = self.auth.update_profile(data)
        return self.dispatch(UserUpdated(user))

    def is_admin(self) -> bool:
        return self.state.is_authenticated and self.auth.is_admin(self.state.user)
