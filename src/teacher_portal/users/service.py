from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.validators import require_email, require_non_empty
from ..core.constants import (
    ACCESS_TOKEN_KEY,
    AUTH_SESSION_KEYS,
    REFRESH_TOKEN_KEY,
    USER_EMAIL_KEY,
    USER_ID_KEY,
    USER_NAME_KEY,
    USER_ROLE_KEY,
)
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, MalformedResponse, RequestFailed, ValidationError
from ..storage.repository import KeyValueStore
from .model import AuthResult, AuthSession
from .repository import AuthGateway

logger = logging.getLogger(__name__)

_REJECTED_STATUSES = {400, 401, 403, 409}


class AuthService:
    """Use case: sign a teacher in and keep the session in the key-value store."""

    def __init__(self, auth: AuthGateway, store: KeyValueStore):
        self._auth = auth
        self._store = store

    def login(self, email: str, password: str) -> AuthSession:
        email = require_email(email)
        password = require_non_empty(password, "Password")
        try:
            result = self._auth.login(email, password)
        except MalformedResponse:
            raise
        except RequestFailed as e:
            if e.status in _REJECTED_STATUSES:
                raise AuthenticationError(e.message or "Login failed") from e
            raise
        session = self._to_session(result, email=email)
        self._persist(session)
        logger.info("Signed in %s", session.email)
        return session

    def register(self, email: str, password: str, name: str, role: str = Role.TEACHER.value) -> AuthSession:
        email = require_email(email)
        password = require_non_empty(password, "Password")
        name = require_non_empty(name, "Name")
        try:
            role = Role(role).value
        except ValueError:
            raise ValidationError(f"Unknown role {role!r}")

        try:
            result = self._auth.register(email, password, name, role)
        except MalformedResponse:
            raise
        except RequestFailed as e:
            if e.status in _REJECTED_STATUSES:
                raise AuthenticationError(e.message or "Registration failed") from e
            raise
        session = self._to_session(result, email=email, name=name, role=role)
        self._persist(session)
        logger.info("Registered %s as %s", session.email, role)
        return session

    def refresh(self, session: AuthSession) -> AuthSession:
        try:
            result = self._auth.refresh(session.refresh_token)
        except MalformedResponse:
            raise
        except RequestFailed as e:
            if e.status in _REJECTED_STATUSES:
                raise AuthenticationError(e.message or "Token refresh failed") from e
            raise
        refreshed = replace(session, access_token=result.access_token, refresh_token=result.refresh_token)
        self._store.set(ACCESS_TOKEN_KEY, refreshed.access_token)
        self._store.set(REFRESH_TOKEN_KEY, refreshed.refresh_token)
        return refreshed

    def logout(self) -> None:
        for key in AUTH_SESSION_KEYS:
            self._store.delete(key)

    def current_session(self) -> Optional[AuthSession]:
        token = self._store.get(ACCESS_TOKEN_KEY)
        email = self._store.get(USER_EMAIL_KEY)
        if not token or not email:
            return None
        return AuthSession(
            access_token=token,
            refresh_token=self._store.get(REFRESH_TOKEN_KEY) or "",
            user_id=self._store.get(USER_ID_KEY) or "",
            email=email,
            name=self._store.get(USER_NAME_KEY),
            role=self._store.get(USER_ROLE_KEY),
        )

    def is_authenticated(self) -> bool:
        return bool(self._store.get(ACCESS_TOKEN_KEY))

    @staticmethod
    def _to_session(
        result: AuthResult,
        *,
        email: str,
        name: Optional[str] = None,
        role: Optional[str] = None,
    ) -> AuthSession:
        return AuthSession(
            access_token=result.access_token,
            refresh_token=result.refresh_token,
            user_id=result.user_id or "",
            email=result.email or email,
            name=result.name or name,
            role=result.role or role,
        )

    def _persist(self, session: AuthSession) -> None:
        self._store.set(ACCESS_TOKEN_KEY, session.access_token)
        self._store.set(REFRESH_TOKEN_KEY, session.refresh_token)
        self._store.set(USER_EMAIL_KEY, session.email)
        if session.user_id:
            self._store.set(USER_ID_KEY, session.user_id)
        if session.name:
            self._store.set(USER_NAME_KEY, session.name)
        if session.role:
            self._store.set(USER_ROLE_KEY, session.role)
