"""Best-effort response cache on top of a :class:`KeyValueStore`.

Reads never raise: a missing, unreadable or corrupt entry is reported as
``None``. Writes never raise either; a failed write is logged and the caller
carries on with the live value it already has.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, List, Optional

from ..core.exceptions import CacheReadFailure
from .repository import KeyValueStore

logger = logging.getLogger(__name__)


class ResponseCache:
    def __init__(self, store: KeyValueStore, *, clock: Callable[[], float] = time.time):
        self._store = store
        self._clock = clock

    def read_cached(self, key: str) -> Optional[Any]:
        try:
            raw = self._store.get(key)
        except Exception:
            logger.warning("Cache read for %s failed", key, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return _decode(key, raw)
        except CacheReadFailure as e:
            logger.warning("%s", e)
            return None

    def write_cached(self, key: str, value: Any) -> None:
        try:
            self._store.set(key, json.dumps(value))
        except Exception:
            logger.warning("Cache write for %s failed", key, exc_info=True)

    def remove(self, key: str) -> None:
        try:
            self._store.delete(key)
        except Exception:
            logger.warning("Cache delete for %s failed", key, exc_info=True)

    # Timestamped entries: {"timestamp": <ms>, "data": <value>}

    def write_stamped(self, key: str, value: Any) -> None:
        self.write_cached(key, {"timestamp": self._now_ms(), "data": value})

    def read_fresh(self, key: str, *, max_age_seconds: float) -> Optional[Any]:
        """Return the stamped value if younger than ``max_age_seconds``.

        Expired or unstamped entries are removed.
        """
        envelope = self.read_cached(key)
        if envelope is None:
            return None
        if self._is_fresh(envelope, max_age_seconds):
            return envelope["data"]
        self.remove(key)
        return None

    def purge_stale(self, prefix: str, *, max_age_seconds: float) -> List[str]:
        """Remove stamped entries under ``prefix`` older than ``max_age_seconds``."""
        try:
            keys = self._store.keys(prefix)
        except Exception:
            logger.warning("Listing cache keys under %s failed", prefix, exc_info=True)
            return []

        removed = []
        for key in keys:
            envelope = self.read_cached(key)
            if envelope is not None and not self._is_fresh(envelope, max_age_seconds):
                self.remove(key)
                removed.append(key)
        if removed:
            logger.info("Purged stale cache entries: %s", removed)
        return removed

    def _is_fresh(self, envelope: Any, max_age_seconds: float) -> bool:
        if not isinstance(envelope, dict) or "timestamp" not in envelope:
            return False
        try:
            age_ms = self._now_ms() - int(envelope["timestamp"])
        except (TypeError, ValueError):
            return False
        return age_ms < max_age_seconds * 1000

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)


def _decode(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise CacheReadFailure(f"Cached value for {key} is corrupt: {e}") from e
