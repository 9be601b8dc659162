from __future__ import annotations

import json
import logging
import os
import threading
from typing import Any

from msal_extensions import FilePersistence, FilePersistenceWithDataProtection
from msal_extensions.persistence import PersistenceNotFound

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"
AUTHENTICATED_KEY = "isAuthenticated"

SESSION_KEYS = (TOKEN_KEY, USER_KEY, AUTHENTICATED_KEY)


class MemorySessionStore:
    """Key/value store that lives as long as the process."""

    def __init__(self):
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)


class PersistedSessionStore:
    """Key/value store saved as one JSON document through msal_extensions.

    The document is encrypted with the platform data protection API where one
    exists and written as a plain file otherwise.
    """

    def __init__(self, path: str):
        self._persistence = self._build_persistence(path)
        self._values = self._read()

    @staticmethod
    def _build_persistence(path: str):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        try:
            return FilePersistenceWithDataProtection(path)
        except Exception:
            return FilePersistence(path)

    def _read(self) -> dict[str, str]:
        try:
            raw = self._persistence.load()
        except PersistenceNotFound:
            return {}
        if not raw:
            return {}
        try:
            parsed = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable session file at %s", self._persistence.get_location())
            return {}
        if not isinstance(parsed, dict):
            return {}
        return {str(key): str(value) for key, value in parsed.items()}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._persistence.save(json.dumps(self._values))

    def delete(self, key: str) -> None:
        if key in self._values:
            del self._values[key]
            self._persistence.save(json.dumps(self._values))


class SessionContext:
    """The signed-in user's credential, shared by reference with the HTTP client."""

    def __init__(self, store: MemorySessionStore | PersistedSessionStore | None = None):
        self._store = store if store is not None else MemorySessionStore()
        self._lock = threading.Lock()

    @property
    def token(self) -> str | None:
        return self._store.get(TOKEN_KEY) or None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self._store.get(AUTHENTICATED_KEY) == "true"

    @property
    def user(self) -> dict[str, Any] | None:
        raw = self._store.get(USER_KEY)
        if not raw:
            return None
        try:
            user = json.loads(raw)
        except ValueError:
            return None
        return user if isinstance(user, dict) else None

    def begin(self, token: str, user: dict[str, Any]) -> None:
        if not token:
            raise ValueError("A session token is required")
        with self._lock:
            self._store.set(USER_KEY, json.dumps(user))
            self._store.set(AUTHENTICATED_KEY, "true")
            self._store.set(TOKEN_KEY, token)

    def clear(self) -> bool:
        """Remove the token and the derived user state.

        Returns True when a token was present. Clearing an empty session is a
        no-op that touches nothing. Only one of several concurrent callers sees
        True.
        """
        with self._lock:
            had_token = self.token is not None
            present = [key for key in SESSION_KEYS if self._store.get(key) is not None]
            for key in present:
                self._store.delete(key)
            return had_token


def build_session(session_path: str) -> SessionContext:
    if session_path:
        return SessionContext(PersistedSessionStore(session_path))
    return SessionContext(MemorySessionStore())
