from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import DateLike, to_iso
from ..core.constants import (
    COMMENTS_KEY_PREFIX,
    COURSES_STORAGE_KEY,
    LOW_ATTENDANCE_KEY_PREFIX,
    NO_DATE_SENTINEL,
    TA_COURSES_STORAGE_KEY,
)


def courses_cache_key(email: str) -> str:
    return f"{COURSES_STORAGE_KEY}:{email.strip().lower()}"


def ta_courses_cache_key(email: str) -> str:
    return f"{TA_COURSES_STORAGE_KEY}:{email.strip().lower()}"


def low_attendance_cache_key(
    course_code: str,
    start_date: Optional[DateLike] = None,
    end_date: Optional[DateLike] = None,
) -> str:
    """Key for one course and date range.

    Each missing bound is written as its own sentinel, so "no start" and
    "no end" land in separate partitions.
    """
    start = to_iso(start_date) or NO_DATE_SENTINEL
    end = to_iso(end_date) or NO_DATE_SENTINEL
    return f"{LOW_ATTENDANCE_KEY_PREFIX}:{course_code}:{start}:{end}"


def comments_cache_key(grievance_id: str) -> str:
    return f"{COMMENTS_KEY_PREFIX}{grievance_id}"
