from __future__ import annotations

from typing import Any, Dict, List

from ..common.validators import require_non_empty
from .model import Comment, Grievance, GrievanceStats
from .repository import GrievanceGateway


class GrievanceService:
    def __init__(self, grievances: GrievanceGateway):
        self._grievances = grievances

    def newest_first(self) -> List[Grievance]:
        return list(reversed(list(self._grievances.list_grievances())))

    def comments_newest_first(self, c_id: str) -> List[Comment]:
        return list(reversed(list(self._grievances.get_comments(c_id))))

    def stats(self) -> GrievanceStats:
        return self._grievances.get_stats()

    def create(self, *, user_id: str, title: str, description: str, category: str) -> Dict[str, Any]:
        return self._grievances.create_grievance(
            user_id=require_non_empty(user_id, "User"),
            title=require_non_empty(title, "Title"),
            description=require_non_empty(description, "Description"),
            category=require_non_empty(category, "Category"),
        )

    def delete(self, c_id: str) -> Dict[str, Any]:
        return self._grievances.delete_grievance(require_non_empty(c_id, "Grievance"))

    def upvote(self, c_id: str, user_id: str) -> Dict[str, Any]:
        return self._grievances.upvote(c_id, require_non_empty(user_id, "User"))

    def downvote(self, c_id: str, user_id: str) -> Dict[str, Any]:
        return self._grievances.downvote(c_id, require_non_empty(user_id, "User"))

    def add_resolver(self, c_id: str, user_id: str) -> Dict[str, Any]:
        return self._grievances.add_resolver(c_id, require_non_empty(user_id, "User"))

    def comment(self, c_id: str, *, user_id: str, message: str) -> Dict[str, Any]:
        return self._grievances.post_comment(
            c_id,
            user_id=require_non_empty(user_id, "User"),
            message=require_non_empty(message, "Comment"),
        )
