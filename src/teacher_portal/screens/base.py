"""View-state plumbing shared by the portal screens.

A screen loads in two explicit phases: :meth:`CachedScreen.load_cached` puts
the last known good value on screen, then :meth:`CachedScreen.fetch_live`
asks the backend and, on success, overwrites both the displayed value and
the cache. Results that arrive after :meth:`Screen.unmount` are dropped.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, Optional, Sequence, TypeVar

from ..core.exceptions import PortalError, RequestFailed, ValidationError
from ..storage.cache import ResponseCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ScreenState:
    loading: bool = False
    refreshing: bool = False
    saving: bool = False
    error: Optional[str] = None
    notice: Optional[str] = None


class Screen:
    """Owns a :class:`ScreenState` and refuses updates once unmounted."""

    failure_message = "Something went wrong. Please try again."

    def __init__(self):
        self.state = ScreenState()
        self._mounted = True

    @property
    def mounted(self) -> bool:
        return self._mounted

    def unmount(self) -> None:
        self._mounted = False

    def _update(self, **changes: Any) -> bool:
        if not self._mounted:
            logger.debug("%s is unmounted, dropping %s", type(self).__name__, sorted(changes))
            return False
        for name, value in changes.items():
            setattr(self.state, name, value)
        return True

    def _report(self, error: PortalError, message: Optional[str] = None) -> None:
        """Turn a failure into the user-visible message for this screen."""
        if isinstance(error, ValidationError):
            text = str(error)
        else:
            text = message or self.failure_message
            logger.error("%s: %s", type(self).__name__, error)
        self._update(error=text, notice=None)

    def _succeed(self, notice: str, *, refreshed: bool = True) -> None:
        """Show ``notice``; a failed follow-up refresh keeps its error visible."""
        if refreshed:
            self._update(error=None, notice=notice)
        else:
            self._update(notice=notice)


class CachedScreen(Screen, Generic[T]):
    """Screen whose main value is cached under :meth:`cache_key`.

    Set ``max_age_seconds`` to keep timestamped entries and ignore stale ones.
    """

    max_age_seconds: Optional[float] = None

    def __init__(self, cache: ResponseCache):
        super().__init__()
        self._cache = cache
        self.data: Optional[T] = None

    def cache_key(self) -> str:
        raise NotImplementedError

    def fetch(self) -> T:
        raise NotImplementedError

    def encode(self, value: T) -> Any:
        return value

    def decode(self, raw: Any) -> T:
        return raw

    def on_data(self, value: T) -> None:
        """Hook run after a value is applied to the screen."""

    def load(self) -> None:
        had_cache = self.load_cached()
        self.fetch_live(show_loading=not had_cache)

    def refresh(self) -> None:
        self._update(refreshing=True)
        self.fetch_live(show_loading=False)

    def load_cached(self) -> bool:
        key = self.cache_key()
        if self.max_age_seconds is None:
            raw = self._cache.read_cached(key)
        else:
            raw = self._cache.read_fresh(key, max_age_seconds=self.max_age_seconds)
        if raw is None:
            return False
        try:
            value = self.decode(raw)
        except (KeyError, TypeError, ValueError):
            logger.warning("Cached value under %s has an unexpected shape", key, exc_info=True)
            return False
        return self._apply(value)

    def fetch_live(self, *, show_loading: bool = True) -> bool:
        key = self.cache_key()
        if show_loading:
            self._update(loading=True)
        try:
            value = self.fetch()
        except (RequestFailed, ValidationError) as e:
            self._update(loading=False, refreshing=False)
            self._report(e)
            return False

        if self.max_age_seconds is None:
            self._cache.write_cached(key, self.encode(value))
        else:
            self._cache.write_stamped(key, self.encode(value))

        self._update(loading=False, refreshing=False, error=None)
        if key != self.cache_key():
            # The query changed while this fetch was in flight.
            return False
        return self._apply(value)

    def _apply(self, value: T) -> bool:
        if not self._mounted:
            return False
        self.data = value
        self.on_data(value)
        return True


def filter_by_text(items: Iterable[T], query: Optional[str], fields: Sequence[str]) -> List[T]:
    """Case-insensitive substring match of ``query`` over the given attributes."""
    items = list(items)
    needle = (query or "").strip().lower()
    if not needle:
        return items
    return [
        item
        for item in items
        if any(needle in str(getattr(item, f, "") or "").lower() for f in fields)
    ]
