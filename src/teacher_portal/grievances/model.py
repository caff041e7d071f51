from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.enums import GrievanceStatus


@dataclass(frozen=True)
class Grievance:
    c_id: str
    user_id: str
    title: str
    description: str
    category: Optional[str] = None
    status: GrievanceStatus = GrievanceStatus.PENDING
    upvotes: int = 0
    comment_count: int = 0
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Grievance":
        try:
            status = GrievanceStatus(str(data.get("status") or "pending").lower())
        except ValueError:
            status = GrievanceStatus.PENDING
        upvotes = data.get("upvotes") or 0
        if isinstance(upvotes, list):
            upvotes = len(upvotes)
        return cls(
            c_id=str(data["c_id"]),
            user_id=str(data.get("user_id") or ""),
            title=str(data.get("title") or data.get("complaint_title") or ""),
            description=str(data.get("description") or data.get("complaint_message") or ""),
            category=data.get("category"),
            status=status,
            upvotes=int(upvotes),
            comment_count=int(data.get("comment_count") or 0),
            created_at=data.get("created_at"),
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "c_id": self.c_id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "status": self.status.value,
            "upvotes": self.upvotes,
            "comment_count": self.comment_count,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class Comment:
    comment_id: str
    user_id: str
    c_message: str
    created_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Comment":
        return cls(
            comment_id=str(data.get("comment_id") or ""),
            user_id=str(data.get("user_id") or ""),
            c_message=str(data.get("c_message") or data.get("comment") or ""),
            created_at=data.get("created_at"),
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "comment_id": self.comment_id,
            "user_id": self.user_id,
            "c_message": self.c_message,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class GrievanceStats:
    total_complaints: int
    resolved_complaints: int
    unresolved_complaints: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "GrievanceStats":
        return cls(
            total_complaints=int(data.get("total_complaints") or 0),
            resolved_complaints=int(data.get("resolved_complaints") or 0),
            unresolved_complaints=int(data.get("unresolved_complaints") or 0),
        )
