from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class StudentRosterEntry:
    """One student of a course roster during a roll-taking session.

    ``present`` is session-local and only reaches the backend on save.
    """

    id: str
    course_code: str
    roll_no: str
    name: str
    present: bool = True

    @classmethod
    def from_api(cls, data: Dict[str, Any], *, course_code: str = "") -> "StudentRosterEntry":
        return cls(
            id=str(data.get("id") or data.get("_id") or data["roll_no"]),
            course_code=str(data.get("course_code") or course_code),
            roll_no=str(data["roll_no"]),
            name=str(data.get("name") or ""),
        )


@dataclass(frozen=True)
class LowAttendanceStudent:
    student_name: str
    student_roll_no: str
    attendance_percentage: float

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "LowAttendanceStudent":
        return cls(
            student_name=str(data.get("student_name") or ""),
            student_roll_no=str(data.get("student_roll_no") or data.get("roll_no") or ""),
            attendance_percentage=float(data.get("attendance_percentage") or 0),
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "student_name": self.student_name,
            "student_roll_no": self.student_roll_no,
            "attendance_percentage": self.attendance_percentage,
        }


@dataclass(frozen=True)
class LowAttendanceRecord:
    """Server-computed list of students below the attendance threshold."""

    course_code: str
    total_classes: int
    total_students: int
    students: Tuple[LowAttendanceStudent, ...] = field(default_factory=tuple)
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "LowAttendanceRecord":
        return cls(
            course_code=str(data["course_code"]),
            total_classes=int(data.get("total_classes") or 0),
            total_students=int(data.get("total_students") or 0),
            students=tuple(LowAttendanceStudent.from_api(s) for s in data.get("students") or ()),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
        )

    def to_api(self) -> Dict[str, Any]:
        return {
            "course_code": self.course_code,
            "total_classes": self.total_classes,
            "total_students": self.total_students,
            "students": [s.to_api() for s in self.students],
            "start_date": self.start_date,
            "end_date": self.end_date,
        }


@dataclass(frozen=True)
class StudentPercentage:
    """Read-model row of the per-course percentage report."""

    student_name: str
    roll_no: str
    attendance_percentage: float
    attended_classes: int

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "StudentPercentage":
        return cls(
            student_name=str(data.get("student_name") or "Unknown"),
            roll_no=str(data.get("roll_no") or "N/A"),
            attendance_percentage=float(data.get("attendance_percentage") or 0),
            attended_classes=int(data.get("attended_classes") or 0),
        )


@dataclass(frozen=True)
class Tally:
    present: int
    absent: int
    total: int
