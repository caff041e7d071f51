from __future__ import annotations

from typing import List, Optional, Protocol


class KeyValueStore(Protocol):
    """String-to-string persistence used for cached responses and the auth session."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def keys(self, prefix: str = "") -> List[str]:
        raise NotImplementedError
