from __future__ import annotations

from typing import Any, Dict, Protocol, Sequence

from .model import Comment, Grievance, GrievanceStats


class GrievanceGateway(Protocol):
    def list_grievances(self) -> Sequence[Grievance]:
        """Grievances in the order the backend stores them (oldest first)."""

        raise NotImplementedError

    def create_grievance(self, *, user_id: str, title: str, description: str, category: str) -> Dict[str, Any]:
        raise NotImplementedError

    def delete_grievance(self, c_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def upvote(self, c_id: str, user_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def downvote(self, c_id: str, user_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def add_resolver(self, c_id: str, user_id: str) -> Dict[str, Any]:
        raise NotImplementedError

    def get_comments(self, c_id: str) -> Sequence[Comment]:
        raise NotImplementedError

    def post_comment(self, c_id: str, *, user_id: str, message: str) -> Dict[str, Any]:
        raise NotImplementedError

    def get_stats(self) -> GrievanceStats:
        raise NotImplementedError
