from __future__ import annotations

import pytest

from teacher_portal.attendance.model import StudentRosterEntry
from teacher_portal.attendance.roll import AttendanceRoll, extract_numeric_suffix, sort_by_roll
from teacher_portal.core.exceptions import RequestFailed


def entry(sid: str, roll_no: str, name: str = "", present: bool = False) -> StudentRosterEntry:
    return StudentRosterEntry(id=sid, course_code="CS101", roll_no=roll_no, name=name or sid, present=present)


class FakeAttendanceGateway:
    def __init__(self, students=None, *, fail_fetch=False, fail_mark=False):
        self.students = list(students or [])
        self.fail_fetch = fail_fetch
        self.fail_mark = fail_mark
        self.marked = []

    def get_students(self, course_code):
        if self.fail_fetch:
            raise RequestFailed("Failed to fetch students", status=500)
        return list(self.students)

    def mark_attendance(self, course_code, roll_numbers):
        if self.fail_mark:
            raise RequestFailed("Failed to mark attendance", status=503)
        self.marked.append((course_code, list(roll_numbers)))
        return {"message": "ok"}


def loaded_roll(students):
    roll = AttendanceRoll(FakeAttendanceGateway(students))
    roll.load("CS101")
    return roll


def test_extract_numeric_suffix_strips_non_digits():
    assert extract_numeric_suffix("CS101") == 101
    assert extract_numeric_suffix("CS007") == 7
    assert extract_numeric_suffix("2021-CS-045") == 2021045
    assert extract_numeric_suffix("CSE") is None
    assert extract_numeric_suffix("") is None


def test_sort_is_numeric_not_lexical():
    rows = [entry("a", "CS104"), entry("b", "CS12"), entry("c", "CS3")]
    assert [r.roll_no for r in sort_by_roll(rows)] == ["CS3", "CS12", "CS104"]


def test_sort_is_stable_for_equal_numbers_and_puts_digitless_last():
    rows = [entry("x", "NODIGIT"), entry("a", "CS05"), entry("b", "EE5"), entry("c", "CS1")]
    assert [r.id for r in sort_by_roll(rows)] == ["c", "a", "b", "x"]


def test_load_marks_everyone_present_and_sorts():
    roll = loaded_roll([entry("a", "CS104"), entry("b", "CS12", present=False), entry("c", "CS3")])

    assert [e.roll_no for e in roll.entries] == ["CS3", "CS12", "CS104"]
    assert all(e.present for e in roll.entries)
    assert roll.course_code == "CS101"


def test_load_failure_keeps_previous_roster():
    gateway = FakeAttendanceGateway([entry("a", "CS1")])
    roll = AttendanceRoll(gateway)
    roll.load("CS101")

    gateway.fail_fetch = True
    with pytest.raises(RequestFailed):
        roll.load("CS202")

    assert [e.id for e in roll.entries] == ["a"]
    assert roll.course_code == "CS101"


def test_toggle_twice_restores_flag_and_leaves_others_untouched():
    roll = loaded_roll([entry("a", "CS1"), entry("b", "CS2"), entry("c", "CS3")])
    roll.mark_all(False)
    roll.toggle("c")
    before = roll.entries

    assert roll.toggle("b") is True
    assert roll.entries[1].present is True
    roll.toggle("b")

    assert roll.entries == before


def test_toggle_unknown_id_is_a_noop():
    roll = loaded_roll([entry("a", "CS1")])
    before = roll.entries

    assert roll.toggle("missing") is False
    assert roll.entries == before


def test_mark_all_and_tally():
    roll = loaded_roll([entry("a", "CS1"), entry("b", "CS2"), entry("c", "CS3")])

    roll.mark_all(False)
    t = roll.tally()
    assert (t.present, t.absent, t.total) == (0, 3, 3)

    roll.toggle("a")
    t = roll.tally()
    assert t.present + t.absent == t.total == 3
    assert t.present == 1

    roll.mark_all(True)
    t = roll.tally()
    assert (t.present, t.absent, t.total) == (3, 0, 3)


def test_tally_of_empty_roster():
    roll = AttendanceRoll(FakeAttendanceGateway())
    t = roll.tally()
    assert (t.present, t.absent, t.total) == (0, 0, 0)


@pytest.mark.parametrize("toggles", [["b"], ["a", "b", "a"], ["c", "b", "c"]])
def test_save_submits_present_rolls_in_roster_order(toggles):
    gateway = FakeAttendanceGateway([entry("a", "CS1"), entry("b", "CS2"), entry("c", "CS3")])
    roll = AttendanceRoll(gateway)
    roll.load("CS101")

    for sid in toggles:
        roll.toggle(sid)

    submitted = roll.save("CS101")

    assert submitted == ["CS1", "CS3"]
    assert gateway.marked == [("CS101", ["CS1", "CS3"])]


def test_save_failure_leaves_roster_untouched():
    gateway = FakeAttendanceGateway([entry("a", "CS1"), entry("b", "CS2")], fail_mark=True)
    roll = AttendanceRoll(gateway)
    roll.load("CS101")
    roll.toggle("a")
    before = roll.entries

    with pytest.raises(RequestFailed):
        roll.save("CS101")

    assert roll.entries == before


def test_set_present_is_idempotent():
    roll = loaded_roll([entry("a", "CS1"), entry("b", "CS2")])
    roll.mark_all(False)

    assert roll.set_present("b", True) is True
    assert roll.set_present("b", True) is True

    assert roll.present_roll_numbers() == ["CS2"]
    assert roll.set_present("missing", True) is False
