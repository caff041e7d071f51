from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..common.datetime_utils import DateLike, parse_iso_date
from ..common.validators import require_email, require_non_empty
from ..core.constants import LOW_ATTENDANCE_THRESHOLD
from ..core.exceptions import ValidationError
from .model import LowAttendanceRecord, LowAttendanceStudent, StudentPercentage
from .repository import AttendanceGateway, NotificationGateway
from .roll import sort_by_roll


def _as_date(value: Optional[DateLike]) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value)[:10])


def _check_range(start_date: Optional[DateLike], end_date: Optional[DateLike]) -> None:
    start, end = _as_date(start_date), _as_date(end_date)
    if start and end and end < start:
        raise ValidationError("End date must be on or after start date")


class AttendanceService:
    def __init__(self, attendance: AttendanceGateway, notifications: Optional[NotificationGateway] = None):
        self._attendance = attendance
        self._notifications = notifications

    def add_student(self, course_code: str, *, name: str, roll_no: str) -> Dict[str, Any]:
        course_code = require_non_empty(course_code, "Course")
        name = require_non_empty(name, "Student name")
        roll_no = require_non_empty(roll_no, "Roll number")
        return self._attendance.add_student(course_code, name=name, roll_no=roll_no)

    def low_attendance(
        self,
        course_code: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> LowAttendanceRecord:
        course_code = require_non_empty(course_code, "Course")
        _check_range(start_date, end_date)
        return self._attendance.get_low_attendance(course_code, start_date=start_date, end_date=end_date)

    def course_percentages(
        self,
        course_code: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[StudentPercentage]:
        """Per-student percentages for a course, ordered by roll number."""
        course_code = require_non_empty(course_code, "Course")
        _check_range(start_date, end_date)
        rows = self._attendance.get_course_percentages(course_code, start_date=start_date, end_date=end_date)
        return sort_by_roll(rows)

    def class_stats(
        self,
        course_code: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> Dict[str, Any]:
        _check_range(start_date, end_date)
        return self._attendance.get_class_stats(course_code, start_date=start_date, end_date=end_date)

    def student_stats(
        self,
        student_id: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> Dict[str, Any]:
        _check_range(start_date, end_date)
        return self._attendance.get_student_stats(student_id, start_date=start_date, end_date=end_date)

    def send_warning(self, *, to: str, sender_name: str, student: LowAttendanceStudent) -> Dict[str, Any]:
        if self._notifications is None:
            raise ValidationError("Notifications are not configured")
        if student.attendance_percentage >= LOW_ATTENDANCE_THRESHOLD:
            raise ValidationError(
                f"{student.student_name} is at or above the {LOW_ATTENDANCE_THRESHOLD}% threshold"
            )
        return self._notifications.send_warning_email(
            to=require_email(to, "Recipient"),
            sender_name=require_non_empty(sender_name, "Sender name"),
            student_name=student.student_name,
            attendance_percentage=student.attendance_percentage,
        )
