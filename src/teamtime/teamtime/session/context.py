"""Per-request view of who is logged in and their UI preferences.

Controllers never touch ``flask.session`` directly; they go through a
``SessionContext`` backed by a ``KeyValueStore`` so the storage can be swapped
(cookie session in the app, plain dict in tests).
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from flask import session

from ..core.constants import DEFAULT_THEME
from ..users.service import SessionUser

logger = logging.getLogger(__name__)

USER_KEY = "user"
THEME_KEY = "theme"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class FlaskSessionStore(KeyValueStore):
    """Signed-cookie session of the current request."""

    def get(self, key: str) -> Any:
        return session.get(key)

    def set(self, key: str, value: Any) -> None:
        session[key] = value

    def delete(self, key: str) -> None:
        session.pop(key, None)


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[dict] = None):
        self._data = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SessionContext:
    def __init__(self, store: KeyValueStore):
        self._store = store

    @property
    def current_user(self) -> Optional[SessionUser]:
        raw = self._store.get(USER_KEY)
        if not raw:
            return None
        try:
            return SessionUser.from_dict(raw)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding unreadable session user data")
            self._store.delete(USER_KEY)
            return None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def login(self, user: SessionUser) -> None:
        self._store.set(USER_KEY, user.to_dict())

    def logout(self) -> None:
        self._store.delete(USER_KEY)

    @property
    def theme(self) -> str:
        return self._store.get(THEME_KEY) or DEFAULT_THEME

    def set_theme(self, theme: str) -> None:
        self._store.set(THEME_KEY, (theme or "").strip() or DEFAULT_THEME)
