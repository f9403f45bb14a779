"""
Token storage.

Holds the bearer token and the cached user record under two keys, ``token``
and ``user``. The user is stored as JSON text.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = 'token'
USER_KEY = 'user'


class TokenStore:
    """
    Key-value storage for credentials.

    Subclasses implement ``_read``, ``_write`` and ``_remove``.
    """

    def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _write(self, key: str, value: str) -> None:
        raise NotImplementedError

    def _remove(self, key: str) -> None:
        raise NotImplementedError

    def get_token(self) -> Optional[str]:
        return self._read(TOKEN_KEY)

    def set_token(self, token: str) -> None:
        self._write(TOKEN_KEY, token)

    def get_user(self) -> Optional[Dict[str, Any]]:
        raw = self._read(USER_KEY)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Ignoring malformed cached user")
            return None

    def set_user(self, user: Dict[str, Any]) -> None:
        self._write(USER_KEY, json.dumps(user))

    def clear(self) -> None:
        self._remove(TOKEN_KEY)
        self._remove(USER_KEY)


class MemoryTokenStore(TokenStore):
    """Keeps credentials for the lifetime of the process."""

    def __init__(self):
        self._data = {}

    def _read(self, key):
        return self._data.get(key)

    def _write(self, key, value):
        self._data[key] = value

    def _remove(self, key):
        self._data.pop(key, None)


class FileTokenStore(TokenStore):
    """Persists credentials as a JSON object in a file."""

    def __init__(self, path):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding='utf-8') as handle:
                data = json.load(handle)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as handle:
            json.dump(data, handle)
        os.chmod(self.path, 0o600)

    def _read(self, key):
        return self._load().get(key)

    def _write(self, key, value):
        data = self._load()
        data[key] = value
        self._save(data)

    def _remove(self, key):
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
            logger.debug(f"Removed {key} from {self.path}")
