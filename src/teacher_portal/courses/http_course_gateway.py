from __future__ import annotations

from typing import Any, List
from urllib.parse import quote

from ..api.client import ApiClient
from ..core.exceptions import MalformedResponse
from .model import Course
from .repository import CourseGateway

PREFIX = "/api/teacher"


class HttpCourseGateway(CourseGateway):
    def __init__(self, client: ApiClient):
        self._client = client

    def get_courses(self, email: str) -> List[Course]:
        data = self._client.get(f"{PREFIX}/courses", params={"email": email})
        if not isinstance(data, list):
            raise MalformedResponse("Expected a list of courses")
        return [_course(item) for item in data]

    def add_ta(self, course_code: str, ta_email: str) -> Course:
        data = self._client.post(f"{PREFIX}/courses/{quote(course_code)}/ta", json={"ta_email": ta_email})
        return _course(data)

    def remove_ta(self, course_code: str, ta_email: str) -> Course:
        data = self._client.delete(f"{PREFIX}/courses/{quote(course_code)}/ta", json={"ta_email": ta_email})
        return _course(data)


def _course(data: Any) -> Course:
    # TA endpoints may wrap the course as {"course": {...}}
    if isinstance(data, dict) and isinstance(data.get("course"), dict):
        data = data["course"]
    try:
        return Course.from_api(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedResponse(f"Unexpected course payload: {e}") from e
