from __future__ import annotations

import logging
import uuid
from datetime import date, time
from typing import Callable, Iterable, Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..attendance.factory import validate_thresholds
from ..attendance.repository import AttendanceRepository
from ..common.geo import format_location, parse_location
from ..common.validators import require_int, require_non_empty
from ..core.constants import DEFAULT_CLASS_TIMEZONE
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import CurrentUser
from ..users.permissions import require_instructor, require_owner
from .model import Classroom
from .repository import ClassRepository

logger = logging.getLogger(__name__)


def _new_class_id() -> str:
    return uuid.uuid4().hex


def merge_dates(existing: Sequence[date], new: Iterable[date]) -> tuple[date, ...]:
    """Append unseen dates, keeping the order they were entered in."""
    out = list(existing)
    for d in new:
        if d not in out:
            out.append(d)
    return tuple(out)


class ClassService:
    def __init__(
        self,
        classes: ClassRepository,
        attendance: AttendanceRepository,
        *,
        default_timezone: str = DEFAULT_CLASS_TIMEZONE,
        id_factory: Callable[[], str] = _new_class_id,
    ):
        self._classes = classes
        self._attendance = attendance
        self._default_timezone = default_timezone
        self._id_factory = id_factory

    def get_class(self, class_id: str) -> Classroom:
        classroom = self._classes.get(class_id)
        if not classroom:
            raise NotFoundError("Class not found")
        return classroom

    def create_class(
        self,
        *,
        current_user: CurrentUser,
        class_name: str,
        start_time: time,
        late_minutes: int,
        absent_minutes: int,
        dates: Sequence[date] = (),
        timezone: Optional[str] = None,
    ) -> Classroom:
        require_instructor(current_user)

        late_minutes = require_int(late_minutes, "late_minutes")
        absent_minutes = require_int(absent_minutes, "absent_minutes")
        validate_thresholds(late_minutes, absent_minutes)

        timezone = timezone or self._default_timezone
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValidationError(f"Unknown time zone: {timezone!r}") from None

        classroom = Classroom(
            class_id=self._id_factory(),
            class_name=require_non_empty(class_name, "class_name"),
            creator_email=require_non_empty(current_user.email, "email"),
            start_time=start_time,
            late_minutes=late_minutes,
            absent_minutes=absent_minutes,
            timezone=timezone,
        )
        self._classes.create(classroom, merge_dates((), dates))
        logger.info("Class %s (%s) created by %s", classroom.class_id, classroom.class_name, classroom.creator_email)
        return classroom

    def list_for_instructor(self, creator_email: str) -> Sequence[Classroom]:
        return self._classes.list_by_creator(creator_email)

    def list_for_student(self, user_uid: str) -> Sequence[Classroom]:
        return self._classes.list_for_user(user_uid)

    def list_for(self, current_user: CurrentUser) -> Sequence[Classroom]:
        if current_user.is_instructor:
            return self.list_for_instructor(current_user.email)
        return self.list_for_student(current_user.uid)

    def add_session_dates(self, *, current_user: CurrentUser, class_id: str, dates: Iterable[date]) -> tuple[date, ...]:
        """Append session dates.

        Student records are left as they are; reads pad them to the new length.
        """
        classroom = self.get_class(class_id)
        require_owner(current_user, classroom)

        existing = self._attendance.get_session_dates(class_id)
        merged = merge_dates(existing, dates)
        if merged != existing:
            self._attendance.set_session_dates(class_id, merged)
            logger.info("Class %s: %d session date(s) added", class_id, len(merged) - len(existing))
        return merged

    def update_location(self, *, current_user: CurrentUser, class_id: str, location: str) -> str:
        classroom = self.get_class(class_id)
        require_owner(current_user, classroom)

        normalized = format_location(*parse_location(location))
        self._classes.update_location(class_id, normalized)
        logger.info("Class %s: check-in location set to %s", class_id, normalized)
        return normalized

    def delete_class(self, *, current_user: CurrentUser, class_id: str) -> None:
        classroom = self.get_class(class_id)
        require_owner(current_user, classroom)

        if not self._classes.delete(class_id):
            raise NotFoundError("Class not found")
        logger.info("Class %s deleted by %s", class_id, current_user.email)
