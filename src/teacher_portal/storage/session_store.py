from __future__ import annotations

import secrets
from typing import Iterable, List, Optional

from flask import session

from ..core.constants import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY
from .repository import KeyValueStore

SESSION_ID_KEY = "@session_id"


class FlaskSessionStore(KeyValueStore):
    """Key-value view over the signed Flask session cookie of the current request.

    The cookie is signed, not encrypted, so keys listed in ``server_side_keys``
    never go into it. They live in ``server_store`` under a random per-session id.
    """

    def __init__(
        self,
        server_store: KeyValueStore,
        *,
        server_side_keys: Iterable[str] = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY),
    ):
        self._server_store = server_store
        self._server_side_keys = frozenset(server_side_keys)

    def get(self, key: str) -> Optional[str]:
        if key in self._server_side_keys:
            sid = session.get(SESSION_ID_KEY)
            return self._server_store.get(_server_key(key, sid)) if sid else None
        value = session.get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        if key in self._server_side_keys:
            sid = session.get(SESSION_ID_KEY)
            if not sid:
                sid = session[SESSION_ID_KEY] = secrets.token_urlsafe(32)
            self._server_store.set(_server_key(key, sid), value)
            return
        session[key] = value

    def delete(self, key: str) -> None:
        if key in self._server_side_keys:
            sid = session.get(SESSION_ID_KEY)
            if sid:
                self._server_store.delete(_server_key(key, sid))
            return
        session.pop(key, None)

    def keys(self, prefix: str = "") -> List[str]:
        found = [k for k in session.keys() if k.startswith(prefix) and k != SESSION_ID_KEY]
        found.extend(k for k in sorted(self._server_side_keys) if k.startswith(prefix) and self.get(k) is not None)
        return found


def _server_key(key: str, sid: str) -> str:
    return f"{key}:{sid}"
