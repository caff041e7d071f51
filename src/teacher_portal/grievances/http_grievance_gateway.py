from __future__ import annotations

from typing import Any, Dict, List
from urllib.parse import quote

from ..api.client import ApiClient
from ..core.exceptions import MalformedResponse
from .model import Comment, Grievance, GrievanceStats
from .repository import GrievanceGateway


class HttpGrievanceGateway(GrievanceGateway):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_grievances(self) -> List[Grievance]:
        data = self._client.get("/complaints")
        items = _list_field(data, "complaints")
        try:
            return [Grievance.from_api(item) for item in items]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedResponse(f"Unexpected complaint payload: {e}") from e

    def create_grievance(self, *, user_id: str, title: str, description: str, category: str) -> Dict[str, Any]:
        return self._client.post(
            "/new_complaint",
            json={
                "user_id": user_id,
                "complaint_title": title,
                "complaint_message": description,
                "category": category,
            },
        )

    def delete_grievance(self, c_id: str) -> Dict[str, Any]:
        return self._client.delete(f"/delete_complaint/{quote(c_id)}")

    def upvote(self, c_id: str, user_id: str) -> Dict[str, Any]:
        return self._client.put(f"/upvote/{quote(c_id)}", json={"user_id": user_id})

    def downvote(self, c_id: str, user_id: str) -> Dict[str, Any]:
        return self._client.put(f"/downvote/{quote(c_id)}", json={"user_id": user_id})

    def add_resolver(self, c_id: str, user_id: str) -> Dict[str, Any]:
        return self._client.put(f"/add_resolver/{quote(c_id)}", json={"user_id": user_id})

    def get_comments(self, c_id: str) -> List[Comment]:
        data = self._client.get(f"/get_comments/{quote(c_id)}")
        items = _list_field(data, "comments")
        try:
            return [Comment.from_api(item) for item in items]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedResponse(f"Unexpected comment payload: {e}") from e

    def post_comment(self, c_id: str, *, user_id: str, message: str) -> Dict[str, Any]:
        return self._client.post(f"/add_comment/{quote(c_id)}", json={"user_id": user_id, "comment": message})

    def get_stats(self) -> GrievanceStats:
        data = self._client.get("/stats")
        if not isinstance(data, dict):
            raise MalformedResponse("Expected a JSON object of grievance stats")
        try:
            return GrievanceStats.from_api(data)
        except (TypeError, ValueError) as e:
            raise MalformedResponse(f"Unexpected stats payload: {e}") from e


def _list_field(data: Any, field: str) -> list:
    if not isinstance(data, dict) or not isinstance(data.get(field), list):
        raise MalformedResponse(f"Expected {{'{field}': [...]}}")
    return data[field]
