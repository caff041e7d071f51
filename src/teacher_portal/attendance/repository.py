from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, Sequence

from ..common.datetime_utils import DateLike
from .model import LowAttendanceRecord, StudentPercentage, StudentRosterEntry


class AttendanceGateway(Protocol):
    def get_students(self, course_code: str) -> Sequence[StudentRosterEntry]:
        raise NotImplementedError

    def add_student(self, course_code: str, *, name: str, roll_no: str) -> Dict[str, Any]:
        raise NotImplementedError

    def mark_attendance(self, course_code: str, roll_numbers: Sequence[str]) -> Dict[str, Any]:
        """Submit the whitelist of present roll numbers for one class."""

        raise NotImplementedError

    def get_low_attendance(
        self,
        course_code: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> LowAttendanceRecord:
        raise NotImplementedError

    def get_student_stats(
        self,
        student_id: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> Dict[str, Any]:
        raise NotImplementedError

    def get_class_stats(
        self,
        course_code: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> Dict[str, Any]:
        raise NotImplementedError

    def get_course_percentages(
        self,
        course_code: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> Sequence[StudentPercentage]:
        raise NotImplementedError


class NotificationGateway(Protocol):
    def send_warning_email(
        self,
        *,
        to: str,
        sender_name: str,
        student_name: str,
        attendance_percentage: float,
    ) -> Dict[str, Any]:
        raise NotImplementedError
