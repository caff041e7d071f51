from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from ..core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from ..core.exceptions import MalformedResponse, RequestFailed

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin JSON-over-HTTP client bound to one backend base URL.

    Every call issues exactly one request. There are no retries and no
    caching here; callers decide what to do with a ``RequestFailed``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, *, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, *, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str, *, json: Any = None) -> Any:
        return self.request("DELETE", path, json=json)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        url = self.url_for(path)
        query = _drop_none(params)
        headers = {"Accept": "application/json"}
        if json is not None:
            headers["Content-Type"] = "application/json"

        try:
            response = self._session.request(
                method,
                url,
                params=query or None,
                json=json,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise RequestFailed(f"Network error calling {method} {path}: {e}") from e

        if not response.ok:
            message = _error_message(response) or f"{method} {path} failed"
            logger.error("%s %s returned %s: %s", method, url, response.status_code, message)
            raise RequestFailed(message, status=response.status_code)

        return _decode(response, method=method, path=path)


def _drop_none(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None}


def _decode(response: requests.Response, *, method: str, path: str) -> Any:
    text = response.text or ""
    if not text.strip():
        return None
    if text.lstrip().startswith("<"):
        raise MalformedResponse(
            f"{method} {path} returned HTML instead of JSON", status=response.status_code
        )
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponse(
            f"{method} {path} returned invalid JSON", status=response.status_code
        ) from e


def _error_message(response: requests.Response) -> Optional[str]:
    """Best-effort human message from an error body."""
    try:
        body = response.json()
    except ValueError:
        text = (response.text or "").strip()
        return text[:200] or None
    if isinstance(body, dict):
        for field in ("error", "message", "detail"):
            if body.get(field):
                return str(body[field])
    return None
