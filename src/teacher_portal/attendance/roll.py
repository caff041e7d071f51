"""Session-local roster used while taking attendance for one class.

Nothing here is persisted until :meth:`AttendanceRoll.save`, which submits the
roll numbers of present students only. Absentees are implied by the roster.
"""
from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, TypeVar

from ..core.exceptions import NotFound
from .model import StudentRosterEntry, Tally
from .repository import AttendanceGateway

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")

T = TypeVar("T")


def extract_numeric_suffix(roll_no: str) -> Optional[int]:
    """Integer formed by the digits of ``roll_no`` (``"CS007"`` -> 7).

    Returns ``None`` when the roll number holds no digit at all.
    """
    digits = _NON_DIGITS.sub("", roll_no or "")
    if not digits:
        return None
    return int(digits)


def roll_sort_key(roll_no: str):
    n = extract_numeric_suffix(roll_no)
    # Roll numbers without digits go last, in their fetch order.
    return (1, 0) if n is None else (0, n)


def sort_by_roll(items: Iterable[T], *, roll_of=lambda item: item.roll_no) -> List[T]:
    """Stable numeric sort on roll numbers."""
    return sorted(items, key=lambda item: roll_sort_key(roll_of(item)))


class AttendanceRoll:
    def __init__(self, gateway: AttendanceGateway):
        self._gateway = gateway
        self._entries: List[StudentRosterEntry] = []
        self._course_code: Optional[str] = None

    @property
    def entries(self) -> Sequence[StudentRosterEntry]:
        return tuple(self._entries)

    @property
    def course_code(self) -> Optional[str]:
        return self._course_code

    def __len__(self) -> int:
        return len(self._entries)

    def load(self, course_code: str) -> Sequence[StudentRosterEntry]:
        """Fetch the roster, mark everyone present and sort by roll number.

        On failure the previous roster is kept and the error propagates.
        """
        fetched = self._gateway.get_students(course_code)
        entries = [replace(s, present=True) for s in fetched]
        self._entries = sort_by_roll(entries)
        self._course_code = course_code
        logger.debug("Loaded %d students for %s", len(self._entries), course_code)
        return self.entries

    def clear(self) -> None:
        self._entries = []
        self._course_code = None

    def toggle(self, student_id: str) -> bool:
        """Flip one student's flag. Unknown ids are a logged no-op."""
        try:
            i = self._index_of(student_id)
        except NotFound as e:
            logger.warning("toggle: %s", e)
            return False
        entry = self._entries[i]
        self._entries[i] = replace(entry, present=not entry.present)
        return True

    def set_present(self, student_id: str, present: bool) -> bool:
        """Set one student's flag; repeating the call has no further effect."""
        try:
            i = self._index_of(student_id)
        except NotFound as e:
            logger.warning("set_present: %s", e)
            return False
        self._entries[i] = replace(self._entries[i], present=bool(present))
        return True

    def _index_of(self, student_id: str) -> int:
        for i, entry in enumerate(self._entries):
            if entry.id == student_id:
                return i
        raise NotFound(f"student {student_id} is not on the roster for {self._course_code}")

    def mark_all(self, present: bool) -> None:
        self._entries = [replace(e, present=bool(present)) for e in self._entries]

    def tally(self) -> Tally:
        present = sum(1 for e in self._entries if e.present)
        total = len(self._entries)
        return Tally(present=present, absent=total - present, total=total)

    def present_roll_numbers(self) -> List[str]:
        return [e.roll_no for e in self._entries if e.present]

    def save(self, course_code: str) -> List[str]:
        """Submit present roll numbers in roster order.

        The roster is left as is whether the call succeeds or fails.
        """
        roll_numbers = self.present_roll_numbers()
        self._gateway.mark_attendance(course_code, roll_numbers)
        logger.info("Saved attendance for %s: %d/%d present", course_code, len(roll_numbers), len(self._entries))
        return roll_numbers
