from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AuthResult:
    """Decoded body of the login/register/refresh endpoints."""

    access_token: str
    refresh_token: str
    user_id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "AuthResult":
        user = data.get("user") or {}
        return cls(
            access_token=str(data["accessToken"]),
            refresh_token=str(data["refreshToken"]),
            user_id=_opt_str(user.get("id")),
            email=_opt_str(user.get("email")),
            name=_opt_str(user.get("name")),
            role=_opt_str(user.get("role")),
            message=data.get("message"),
        )


@dataclass(frozen=True)
class AuthSession:
    """The signed-in teacher, passed explicitly to screens and controllers."""

    access_token: str
    refresh_token: str
    user_id: str
    email: str
    name: Optional[str] = None
    role: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "user_id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthSession":
        return cls(
            access_token=str(data["access_token"]),
            refresh_token=str(data["refresh_token"]),
            user_id=str(data.get("user_id") or ""),
            email=str(data["email"]),
            name=data.get("name"),
            role=data.get("role"),
        )


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
