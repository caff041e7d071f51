from __future__ import annotations

from typing import Any

from ..api.client import ApiClient
from ..core.exceptions import MalformedResponse
from .model import AuthResult
from .repository import AuthGateway


class HttpAuthGateway(AuthGateway):
    def __init__(self, client: ApiClient):
        self._client = client

    def login(self, email: str, password: str) -> AuthResult:
        data = self._client.post("/api/v1/auth/login", json={"email": email, "password": password})
        return _auth_result(data)

    def register(self, email: str, password: str, name: str, role: str) -> AuthResult:
        data = self._client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": password, "name": name, "role": role},
        )
        return _auth_result(data)

    def refresh(self, refresh_token: str) -> AuthResult:
        data = self._client.post("/auth/refresh-token", json={"refreshToken": refresh_token})
        return _auth_result(data)


def _auth_result(data: Any) -> AuthResult:
    if not isinstance(data, dict):
        raise MalformedResponse("Expected a JSON object from the auth service")
    try:
        return AuthResult.from_api(data)
    except KeyError as e:
        raise MalformedResponse(f"Auth response is missing {e}") from e
