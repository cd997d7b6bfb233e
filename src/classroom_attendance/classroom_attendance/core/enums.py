from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role claimed by the signed-in user, scoped to one request."""

    INSTRUCTOR = "instructor"
    STUDENT = "student"


class AttendanceCode(str, Enum):
    """Single-character attendance code stored per session date."""

    ON_TIME = "O"
    LATE = "L"
    ABSENT = "A"
    EMPTY = ""

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    AttendanceCode.EMPTY: -1,
    AttendanceCode.ON_TIME: 0,
    AttendanceCode.LATE: 1,
    AttendanceCode.ABSENT: 2,
}
