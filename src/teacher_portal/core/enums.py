from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles issued by the auth backend."""

    TEACHER = "teacher"
    TA = "ta"
    ADMIN = "admin"


class GrievanceStatus(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"


class StatsPeriod(str, Enum):
    """Date-range presets offered by the report screens."""

    WEEK = "week"
    MONTH = "month"
    SEMESTER = "semester"
