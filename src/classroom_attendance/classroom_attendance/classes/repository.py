from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from .model import Classroom


class ClassRepository(Protocol):
    """Class metadata (``class/{id}``) and enrollments (``user/{uid}/classes/{id}``)."""

    def get(self, class_id: str) -> Optional[Classroom]:
        raise NotImplementedError

    def create(self, classroom: Classroom, session_dates: Sequence[date] = ()) -> None:
        raise NotImplementedError

    def delete(self, class_id: str) -> bool:
        """Remove the class with its roster, enrollments and invites."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Classroom]:
        raise NotImplementedError

    def list_by_creator(self, creator_email: str) -> Sequence[Classroom]:
        raise NotImplementedError

    def list_for_user(self, user_uid: str) -> Sequence[Classroom]:
        raise NotImplementedError

    def update_location(self, class_id: str, location: str) -> bool:
        raise NotImplementedError

    def is_enrolled(self, class_id: str, user_uid: str) -> bool:
        raise NotImplementedError

    def enroll(self, class_id: str, user_uid: str, record: Optional[AttendanceRecord] = None) -> None:
        """Enroll the user and, when given, add their roster record in the same transaction."""

        raise NotImplementedError
