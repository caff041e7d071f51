from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

from ..attendance.model import LowAttendanceRecord, StudentPercentage, StudentRosterEntry, Tally
from ..attendance.repository import AttendanceGateway
from ..attendance.roll import AttendanceRoll
from ..attendance.service import AttendanceService
from ..common.datetime_utils import DateLike, period_range, to_iso
from ..core.exceptions import RequestFailed, ValidationError
from ..courses.service import CourseService
from ..storage.cache import ResponseCache
from ..storage.keys import low_attendance_cache_key
from ..users.model import AuthSession
from .base import CachedScreen, Screen, filter_by_text
from .courses import CoursesScreen


class TakeAttendanceScreen(CoursesScreen):
    """Pick a course, mark students and submit the present list."""

    def __init__(
        self,
        session: AuthSession,
        courses: CourseService,
        attendance: AttendanceGateway,
        cache: ResponseCache,
    ):
        super().__init__(session, courses, cache)
        self.roll = AttendanceRoll(attendance)
        self.selected_course_code: Optional[str] = None
        self.saved = False

    def select_course(self, course_code: str) -> bool:
        self.selected_course_code = course_code or None
        self.saved = False
        course = self.find(course_code) if course_code else None
        if course is None:
            self.roll.clear()
            return False

        self._update(loading=True)
        try:
            self.roll.load(course.course_code)
        except RequestFailed as e:
            self.roll.clear()
            self._update(loading=False)
            self._report(e, "Failed to fetch students.")
            return False
        self._update(loading=False, error=None)
        return True

    def toggle(self, student_id: str) -> bool:
        return self.roll.toggle(student_id)

    def mark_present_only(self, student_ids) -> None:
        """Mark exactly the given students present and everyone else absent."""
        wanted = {str(i) for i in student_ids}
        self.roll.mark_all(False)
        for student_id in sorted(wanted):
            self.roll.set_present(student_id, True)

    def mark_all_present(self) -> None:
        self.roll.mark_all(True)

    def mark_all_absent(self) -> None:
        self.roll.mark_all(False)

    def tally(self) -> Tally:
        return self.roll.tally()

    def visible_students(self, query: str = "") -> List[StudentRosterEntry]:
        return filter_by_text(self.roll.entries, query, ("name", "roll_no"))

    def save(self) -> bool:
        if self.state.saving:
            return False
        if not self.selected_course_code or self.roll.course_code is None:
            self._report(ValidationError("Select a course."))
            return False
        if not len(self.roll):
            self._report(ValidationError("No students found."))
            return False

        self._update(saving=True)
        try:
            self.roll.save(self.roll.course_code)
        except RequestFailed as e:
            self._update(saving=False)
            self._report(e, "Failed to save attendance.")
            return False
        self._update(saving=False)
        self.saved = True
        self._succeed("Attendance saved.")
        return True


class LowAttendanceScreen(CachedScreen[LowAttendanceRecord]):
    """Students below the threshold for one course and optional date range."""

    failure_message = "Failed to fetch low attendance students."

    def __init__(
        self,
        session: AuthSession,
        attendance: AttendanceService,
        cache: ResponseCache,
        *,
        course_code: str,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ):
        super().__init__(cache)
        self._session = session
        self._attendance = attendance
        self.course_code = course_code
        self.start_date = to_iso(start_date)
        self.end_date = to_iso(end_date)

    def cache_key(self) -> str:
        return low_attendance_cache_key(self.course_code, self.start_date, self.end_date)

    def fetch(self) -> LowAttendanceRecord:
        return self._attendance.low_attendance(
            self.course_code, start_date=self.start_date, end_date=self.end_date
        )

    def encode(self, value: LowAttendanceRecord) -> Any:
        return value.to_api()

    def decode(self, raw: Any) -> LowAttendanceRecord:
        return LowAttendanceRecord.from_api(raw)

    def set_range(self, start_date: Optional[DateLike], end_date: Optional[DateLike]) -> None:
        self.start_date = to_iso(start_date)
        self.end_date = to_iso(end_date)
        self.data = None
        self.load()

    def set_period(self, period: str, *, today: Optional[date] = None) -> None:
        start, end = period_range(period, today=today)
        self.set_range(start, end)

    def visible(self, query: str = ""):
        students = self.data.students if self.data else ()
        return filter_by_text(students, query, ("student_name", "student_roll_no"))

    def send_warning(self, roll_no: str, to: str) -> bool:
        student = next((s for s in self.visible() if s.student_roll_no == roll_no), None)
        if student is None:
            self._report(ValidationError(f"{roll_no} is not in the low attendance list"))
            return False
        try:
            self._attendance.send_warning(
                to=to,
                sender_name=self._session.name or self._session.email,
                student=student,
            )
        except (RequestFailed, ValidationError) as e:
            self._report(e, "Failed to send warning email.")
            return False
        self._succeed(f"Warning sent to {student.student_name}")
        return True


class ClassReportScreen(Screen):
    """Per-student percentages of one class, with add-student."""

    failure_message = "Failed to load class report."

    def __init__(
        self,
        attendance: AttendanceService,
        *,
        course_code: str,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
    ):
        super().__init__()
        self._attendance = attendance
        self.course_code = course_code
        self.start_date = to_iso(start_date)
        self.end_date = to_iso(end_date)
        self.students: List[StudentPercentage] = []

    @property
    def class_name(self) -> str:
        return self.course_code.upper() or "Unknown Class"

    def load(self) -> bool:
        self._update(loading=True)
        try:
            rows = self._attendance.course_percentages(
                self.course_code, start_date=self.start_date, end_date=self.end_date
            )
        except (RequestFailed, ValidationError) as e:
            self._update(loading=False)
            self._report(e)
            return False
        if not self._update(loading=False, error=None):
            return False
        self.students = rows
        return True

    def visible(self, query: str = "") -> List[StudentPercentage]:
        return filter_by_text(self.students, query, ("student_name", "roll_no"))

    def add_student(self, name: str, roll_no: str) -> bool:
        try:
            self._attendance.add_student(self.course_code, name=name, roll_no=roll_no)
        except (RequestFailed, ValidationError) as e:
            self._report(e, "Failed to add student to course")
            return False
        refreshed = self.load()
        self._succeed("Student added to course successfully", refreshed=refreshed)
        return True
