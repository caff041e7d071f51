from __future__ import annotations

from typing import Optional


class PortalError(Exception):
    """Base exception for the teacher portal client."""


class ValidationError(PortalError):
    """Raised when input data is invalid before it reaches the backend."""


class AuthenticationError(PortalError):
    """Raised when the auth backend rejects credentials or a token."""


class RequestFailed(PortalError):
    """A backend call returned a non-success status or never completed."""

    def __init__(self, message: str, *, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} (HTTP {self.status})"


class MalformedResponse(RequestFailed):
    """The body could not be decoded as the expected JSON shape."""


class CacheReadFailure(PortalError):
    """A persisted cache blob is corrupt. Logged, never surfaced."""


class NotFound(PortalError):
    """A roster operation referenced an id that is not in the roster."""
