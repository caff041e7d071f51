from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

from ..api.client import ApiClient
from ..common.datetime_utils import DateLike, to_iso
from ..core.exceptions import MalformedResponse
from .model import LowAttendanceRecord, StudentPercentage, StudentRosterEntry
from .repository import AttendanceGateway, NotificationGateway

PREFIX = "/api/teacher"

# Raised by from_api on items of the wrong shape.
PAYLOAD_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


def date_params(start_date: Optional[DateLike], end_date: Optional[DateLike]) -> Dict[str, str]:
    """Query parameters for an optional date range.

    A bound is sent only when it is set; with neither set the backend
    applies its default range.
    """
    params = {}
    start = to_iso(start_date)
    end = to_iso(end_date)
    if start is not None:
        params["start_date"] = start
    if end is not None:
        params["end_date"] = end
    return params


class HttpAttendanceGateway(AttendanceGateway):
    def __init__(self, client: ApiClient):
        self._client = client

    def get_students(self, course_code: str) -> List[StudentRosterEntry]:
        data = self._client.get(f"{PREFIX}/courses/{quote(course_code)}/students")
        if isinstance(data, dict):
            data = data.get("students")
        if not isinstance(data, list):
            raise MalformedResponse("Expected a list of students")
        try:
            return [StudentRosterEntry.from_api(item, course_code=course_code) for item in data]
        except PAYLOAD_ERRORS as e:
            raise MalformedResponse(f"Unexpected student payload: {e}") from e

    def add_student(self, course_code: str, *, name: str, roll_no: str) -> Dict[str, Any]:
        return self._client.post(
            f"{PREFIX}/courses/{quote(course_code)}/students",
            json={"name": name, "roll_no": roll_no},
        )

    def mark_attendance(self, course_code: str, roll_numbers: Sequence[str]) -> Dict[str, Any]:
        return self._client.post(
            f"{PREFIX}/attendance",
            json={"course_code": course_code, "roll_numbers": list(roll_numbers)},
        )

    def get_low_attendance(
        self,
        course_code: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> LowAttendanceRecord:
        data = self._client.get(
            f"{PREFIX}/attendance/{quote(course_code)}/low",
            params=date_params(start_date, end_date),
        )
        try:
            return LowAttendanceRecord.from_api(data)
        except PAYLOAD_ERRORS as e:
            raise MalformedResponse(f"Unexpected low-attendance payload: {e}") from e

    def get_student_stats(
        self,
        student_id: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> Dict[str, Any]:
        return self._client.get(
            f"{PREFIX}/attendance/stats/{quote(student_id)}",
            params=date_params(start_date, end_date),
        )

    def get_class_stats(
        self,
        course_code: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> Dict[str, Any]:
        return self._client.get(
            f"{PREFIX}/attendance/stats/course/{quote(course_code)}",
            params=date_params(start_date, end_date),
        )

    def get_course_percentages(
        self,
        course_code: str,
        *,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ) -> List[StudentPercentage]:
        data = self._client.get(
            f"{PREFIX}/attendance/stats/course/{quote(course_code)}/percentage",
            params=date_params(start_date, end_date),
        )
        if not isinstance(data, dict) or not isinstance(data.get("students"), list):
            raise MalformedResponse("Expected {'students': [...]} in percentage report")
        try:
            return [StudentPercentage.from_api(item) for item in data["students"]]
        except PAYLOAD_ERRORS as e:
            raise MalformedResponse(f"Unexpected percentage payload: {e}") from e


class HttpNotificationGateway(NotificationGateway):
    def __init__(self, client: ApiClient):
        self._client = client

    def send_warning_email(
        self,
        *,
        to: str,
        sender_name: str,
        student_name: str,
        attendance_percentage: float,
    ) -> Dict[str, Any]:
        return self._client.post(
            "/api/v1/notifications/email",
            json={
                "to": to,
                "senderName": sender_name,
                "studentName": student_name,
                "attendancePercentage": attendance_percentage,
            },
        )
