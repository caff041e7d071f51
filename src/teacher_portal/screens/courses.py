from __future__ import annotations

from typing import Any, List, Optional

from ..core.exceptions import RequestFailed, ValidationError
from ..courses.model import Course
from ..courses.service import CourseService
from ..storage.cache import ResponseCache
from ..storage.keys import courses_cache_key, ta_courses_cache_key
from ..users.model import AuthSession
from .base import CachedScreen, filter_by_text


class CoursesScreen(CachedScreen[List[Course]]):
    failure_message = "Failed to fetch courses."

    def __init__(self, session: AuthSession, courses: CourseService, cache: ResponseCache):
        super().__init__(cache)
        self._session = session
        self._courses = courses

    def cache_key(self) -> str:
        return courses_cache_key(self._session.email)

    def fetch(self) -> List[Course]:
        return self._courses.courses_for(self._session.email)

    def encode(self, value: List[Course]) -> Any:
        return [c.to_api() for c in value]

    def decode(self, raw: Any) -> List[Course]:
        return [Course.from_api(item) for item in raw]

    def find(self, course_code: str) -> Optional[Course]:
        return next((c for c in self.data or () if c.course_code == course_code), None)

    def visible(self, query: str = "") -> List[Course]:
        return filter_by_text(self.data or [], query, ("course_code",))


class ManageTAScreen(CoursesScreen):
    """Courses with their TAs; adding or removing a TA re-fetches the list."""

    def __init__(self, session: AuthSession, courses: CourseService, cache: ResponseCache):
        super().__init__(session, courses, cache)
        self.selected_course_code: Optional[str] = None

    def cache_key(self) -> str:
        return ta_courses_cache_key(self._session.email)

    def on_data(self, value: List[Course]) -> None:
        if value and not self.selected_course_code:
            self.selected_course_code = value[0].course_code

    def select(self, course_code: str) -> None:
        self.selected_course_code = course_code

    def add_ta(self, ta_email: str) -> bool:
        course = self.find(self.selected_course_code or "")
        if course is None or not (ta_email or "").strip():
            self._report(ValidationError("Please select a course and enter a valid email"))
            return False
        try:
            self._courses.add_ta(course, ta_email.strip())
        except (RequestFailed, ValidationError) as e:
            self._report(e, "Failed to add Teaching Assistant")
            return False
        refreshed = self.fetch_live(show_loading=False)
        self._succeed("Teaching Assistant added successfully", refreshed=refreshed)
        return True

    def remove_ta(self, course_code: str, ta_email: str) -> bool:
        try:
            self._courses.remove_ta(course_code, ta_email)
        except (RequestFailed, ValidationError) as e:
            self._report(e, "Failed to remove Teaching Assistant")
            return False
        refreshed = self.fetch_live(show_loading=False)
        self._succeed("Teaching Assistant removed successfully", refreshed=refreshed)
        return True
