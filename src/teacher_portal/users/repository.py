from __future__ import annotations

from typing import Protocol

from .model import AuthResult


class AuthGateway(Protocol):
    def login(self, email: str, password: str) -> AuthResult:
        raise NotImplementedError

    def register(self, email: str, password: str, name: str, role: str) -> AuthResult:
        raise NotImplementedError

    def refresh(self, refresh_token: str) -> AuthResult:
        raise NotImplementedError
