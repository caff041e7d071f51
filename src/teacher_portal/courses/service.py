from __future__ import annotations

from typing import List

from ..common.validators import require_email, require_non_empty
from ..core.exceptions import ValidationError
from .model import Course
from .repository import CourseGateway


class CourseService:
    def __init__(self, courses: CourseGateway):
        self._courses = courses

    def courses_for(self, email: str) -> List[Course]:
        return list(self._courses.get_courses(require_email(email)))

    def add_ta(self, course: Course, ta_email: str) -> Course:
        ta_email = require_email(ta_email, "TA email")
        if course.has_ta(ta_email):
            raise ValidationError(f"{ta_email} is already a TA of {course.course_code}")
        return self._courses.add_ta(course.course_code, ta_email)

    def remove_ta(self, course_code: str, ta_email: str) -> Course:
        course_code = require_non_empty(course_code, "Course")
        ta_email = require_non_empty(ta_email, "TA email")
        return self._courses.remove_ta(course_code, ta_email)
