from __future__ import annotations

from datetime import date, datetime

import pytest

from teacher_portal.attendance.model import LowAttendanceStudent
from teacher_portal.attendance.service import AttendanceService
from teacher_portal.common.datetime_utils import period_range
from teacher_portal.core.exceptions import ValidationError


class FakeGateway:
    def __init__(self):
        self.calls = []

    def get_class_stats(self, course_code, *, start_date=None, end_date=None):
        self.calls.append((course_code, start_date, end_date))
        return {"average": 80}


class FakeNotifications:
    def __init__(self):
        self.sent = []

    def send_warning_email(self, **kwargs):
        self.sent.append(kwargs)
        return {}


def test_class_stats_accepts_open_ended_range():
    gateway = FakeGateway()

    AttendanceService(gateway).class_stats("CS101", start_date="2024-01-01")

    assert gateway.calls == [("CS101", "2024-01-01", None)]


def test_class_stats_mixed_date_types_compare_by_day():
    gateway = FakeGateway()

    AttendanceService(gateway).class_stats(
        "CS101", start_date=datetime(2024, 1, 1, 18, 0), end_date=date(2024, 1, 1)
    )

    assert len(gateway.calls) == 1


def test_inverted_range_is_rejected_before_the_call():
    gateway = FakeGateway()

    with pytest.raises(ValidationError, match="End date"):
        AttendanceService(gateway).class_stats("CS101", start_date="2024-02-01", end_date="2024-01-01")
    assert gateway.calls == []


def test_malformed_date_is_rejected():
    with pytest.raises(ValidationError, match="YYYY-MM-DD"):
        AttendanceService(FakeGateway()).class_stats("CS101", start_date="01/02/2024", end_date="2024-03-01")


def test_warning_requires_notifications():
    student = LowAttendanceStudent(student_name="Low", student_roll_no="R1", attendance_percentage=40)

    with pytest.raises(ValidationError, match="not configured"):
        AttendanceService(FakeGateway()).send_warning(to="s@x.edu", sender_name="T", student=student)


def test_warning_refused_at_threshold():
    notifications = FakeNotifications()
    student = LowAttendanceStudent(student_name="Edge", student_roll_no="R2", attendance_percentage=75)

    with pytest.raises(ValidationError, match="threshold"):
        AttendanceService(FakeGateway(), notifications).send_warning(to="s@x.edu", sender_name="T", student=student)
    assert notifications.sent == []


def test_period_range_presets():
    today = date(2024, 5, 31)

    assert period_range("week", today=today) == (date(2024, 5, 24), today)
    assert period_range("month", today=today)[0] == date(2024, 5, 1)
    with pytest.raises(ValidationError):
        period_range("decade", today=today)
