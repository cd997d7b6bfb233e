from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time, tzinfo
from typing import Optional, Sequence

from ..core.enums import AttendanceCode


@dataclass(frozen=True)
class ClassSession:
    """Domain entity: a class's check-in rules and its session dates."""

    start_time: time
    late_threshold_minutes: int
    absent_threshold_minutes: int
    session_dates: tuple[date, ...] = ()
    timezone: Optional[tzinfo] = None

    def index_of(self, session_date: date) -> int:
        """Position of a session date, or -1."""
        try:
            return self.session_dates.index(session_date)
        except ValueError:
            return -1


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's codes, aligned with ``session_dates``."""

    student_name: str
    codes: tuple[AttendanceCode, ...] = field(default_factory=tuple)

    def aligned(self, size: int) -> tuple[AttendanceCode, ...]:
        """Codes padded with empty slots (or trimmed) to ``size``."""
        codes = self.codes[:size]
        return codes + (AttendanceCode.EMPTY,) * (size - len(codes))

    def code_at(self, index: int) -> AttendanceCode:
        if 0 <= index < len(self.codes):
            return self.codes[index]
        return AttendanceCode.EMPTY

    @classmethod
    def empty(cls, student_name: str, size: int) -> "AttendanceRecord":
        return cls(student_name=student_name, codes=(AttendanceCode.EMPTY,) * size)

    @classmethod
    def of(cls, student_name: str, codes: Sequence[str]) -> "AttendanceRecord":
        return cls(student_name=student_name, codes=tuple(AttendanceCode(c) for c in codes))


@dataclass(frozen=True)
class CheckinOutcome:
    """Read-model returned to the caller after a successful check-in."""

    class_id: str
    student_name: str
    session_date: date
    code: AttendanceCode


@dataclass(frozen=True)
class SweepSummary:
    classes_scanned: int
    records_marked: int
