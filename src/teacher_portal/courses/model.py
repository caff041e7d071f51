from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Course:
    """A course as the teacher API reports it. Never created client-side."""

    course_code: str
    teachers: Tuple[str, ...] = field(default_factory=tuple)
    tas: Tuple[str, ...] = field(default_factory=tuple)
    total_classes: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Course":
        return cls(
            course_code=str(data["course_code"]),
            teachers=tuple(str(t) for t in data.get("Teacher") or ()),
            tas=tuple(str(t) for t in data.get("TA") or ()),
            total_classes=max(0, int(data.get("total_classes") or 0)),
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "course_code": self.course_code,
            "Teacher": list(self.teachers),
            "TA": list(self.tas),
            "total_classes": self.total_classes,
        }

    def has_ta(self, email: str) -> bool:
        wanted = email.strip().lower()
        return any(t.lower() == wanted for t in self.tas)
