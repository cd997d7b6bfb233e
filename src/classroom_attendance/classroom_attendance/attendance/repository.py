from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Session dates (``class/{id}/students/dates``) and per-student records
    (``class/{id}/students/{name}``)."""

    def get_session_dates(self, class_id: str) -> tuple[date, ...]:
        raise NotImplementedError

    def set_session_dates(self, class_id: str, dates: Sequence[date]) -> None:
        raise NotImplementedError

    def get_record(self, class_id: str, student_name: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_records(self, class_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def save_record(self, class_id: str, record: AttendanceRecord) -> None:
        """Create or overwrite one student's record."""

        raise NotImplementedError

    def replace_roster(self, class_id: str, dates: Sequence[date], records: Sequence[AttendanceRecord]) -> None:
        """Overwrite dates and every record of the class in one write."""

        raise NotImplementedError
