from __future__ import annotations

from typing import Protocol, Sequence

from .model import Course


class CourseGateway(Protocol):
    def get_courses(self, email: str) -> Sequence[Course]:
        raise NotImplementedError

    def add_ta(self, course_code: str, ta_email: str) -> Course:
        raise NotImplementedError

    def remove_ta(self, course_code: str, ta_email: str) -> Course:
        raise NotImplementedError
