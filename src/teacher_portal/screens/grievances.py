from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..core.constants import (
    COMMENTS_KEY_PREFIX,
    COMMENTS_PURGE_AFTER_SECONDS,
    COMMENTS_TTL_SECONDS,
    GRIEVANCES_STORAGE_KEY,
    GRIEVANCES_TTL_SECONDS,
)
from ..core.exceptions import RequestFailed, ValidationError
from ..grievances.model import Comment, Grievance, GrievanceStats
from ..grievances.service import GrievanceService
from ..storage.cache import ResponseCache
from ..storage.keys import comments_cache_key
from ..users.model import AuthSession
from .base import CachedScreen, filter_by_text


class GrievancesScreen(CachedScreen[List[Grievance]]):
    """Grievance feed, newest first, cached for two hours."""

    max_age_seconds = GRIEVANCES_TTL_SECONDS
    failure_message = "Can not fetch grievances at the moment"

    def __init__(self, session: AuthSession, grievances: GrievanceService, cache: ResponseCache):
        super().__init__(cache)
        self._session = session
        self._grievances = grievances
        self.stats: Optional[GrievanceStats] = None
        self.comments: Dict[str, List[Comment]] = {}

    def cache_key(self) -> str:
        return GRIEVANCES_STORAGE_KEY

    def fetch(self) -> List[Grievance]:
        return self._grievances.newest_first()

    def encode(self, value: List[Grievance]) -> Any:
        return [g.to_api() for g in value]

    def decode(self, raw: Any) -> List[Grievance]:
        return [Grievance.from_api(item) for item in raw]

    def load(self) -> None:
        self._cache.purge_stale(COMMENTS_KEY_PREFIX, max_age_seconds=COMMENTS_PURGE_AFTER_SECONDS)
        super().load()
        self.load_stats()

    def load_stats(self) -> bool:
        try:
            stats = self._grievances.stats()
        except RequestFailed as e:
            self._report(e, "Stats could not be loaded")
            return False
        if not self.mounted:
            return False
        self.stats = stats
        return True

    def visible(self, query: str = "", category: Optional[str] = None) -> List[Grievance]:
        items = filter_by_text(self.data or [], query, ("title", "description"))
        if category:
            items = [g for g in items if (g.category or "").lower() == category.lower()]
        return items

    def load_comments(self, c_id: str) -> List[Comment]:
        """Live comments; on failure fall back to a cache younger than an hour."""
        key = comments_cache_key(c_id)
        try:
            comments = self._grievances.comments_newest_first(c_id)
        except RequestFailed:
            cached = self._cache.read_fresh(key, max_age_seconds=COMMENTS_TTL_SECONDS)
            comments = [Comment.from_api(item) for item in cached or []]
        else:
            self._cache.write_stamped(key, [c.to_api() for c in comments])
        if self.mounted:
            self.comments[c_id] = comments
        return comments

    def post_comment(self, c_id: str, message: str) -> bool:
        try:
            self._grievances.comment(c_id, user_id=self._session.user_id, message=message)
        except (RequestFailed, ValidationError) as e:
            self._report(e, "Comment could not be posted")
            return False
        self.load_comments(c_id)
        return True

    def create(self, *, title: str, description: str, category: str) -> bool:
        return self._mutate(
            lambda: self._grievances.create(
                user_id=self._session.user_id, title=title, description=description, category=category
            ),
            done="Grievance submitted",
            failed="Grievance could not be submitted",
        )

    def delete(self, c_id: str) -> bool:
        return self._mutate(lambda: self._grievances.delete(c_id), done="Grievance deleted", failed="Delete failed")

    def upvote(self, c_id: str) -> bool:
        return self._mutate(lambda: self._grievances.upvote(c_id, self._session.user_id), failed="Vote failed")

    def downvote(self, c_id: str) -> bool:
        return self._mutate(lambda: self._grievances.downvote(c_id, self._session.user_id), failed="Vote failed")

    def add_resolver(self, c_id: str) -> bool:
        return self._mutate(
            lambda: self._grievances.add_resolver(c_id, self._session.user_id),
            done="You are now resolving this grievance",
            failed="Could not add resolver",
        )

    def _mutate(self, call, *, failed: str, done: Optional[str] = None) -> bool:
        try:
            call()
        except (RequestFailed, ValidationError) as e:
            self._report(e, failed)
            return False
        refreshed = self.fetch_live(show_loading=False)
        if done:
            self._succeed(done, refreshed=refreshed)
        return True
