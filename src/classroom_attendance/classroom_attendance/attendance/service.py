from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..classes.model import Classroom
from ..classes.repository import ClassRepository
from ..common.datetime_utils import now_local, to_local
from ..common.geo import distance_meters, parse_location
from ..core.constants import DEFAULT_CHECKIN_RADIUS_METERS
from ..core.exceptions import AuthorizationError, DateNotFoundError, NotFoundError, OutOfRangeError
from ..users.model import CurrentUser
from ..users.permissions import require_owner
from . import ledger
from .csv_export import export_csv, import_csv
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, CheckinOutcome, SweepSummary
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        classes: ClassRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        checkin_radius_meters: float = DEFAULT_CHECKIN_RADIUS_METERS,
    ):
        self._attendance = attendance
        self._classes = classes
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._radius = float(checkin_radius_meters or 0)

    def _get_class(self, class_id: str) -> Classroom:
        classroom = self._classes.get(class_id)
        if not classroom:
            raise NotFoundError("Class not found")
        return classroom

    def _check_distance(self, classroom: Classroom, location: Optional[str]) -> None:
        if not location or not classroom.checkin_location or self._radius <= 0:
            return

        distance = distance_meters(parse_location(location), parse_location(classroom.checkin_location))
        if distance > self._radius:
            raise OutOfRangeError(f"You are {distance:.0f} m from the classroom (limit {self._radius:.0f} m)")

    def check_in(
        self,
        *,
        class_id: str,
        current_user: CurrentUser,
        now: datetime | None = None,
        location: str | None = None,
    ) -> CheckinOutcome:
        """Record the signed-in student's own check-in for today's session."""
        if current_user.is_instructor:
            raise AuthorizationError("Only students can check in")
        student_name = current_user.display_name

        classroom = self._get_class(class_id)
        tz = classroom.tzinfo
        now = to_local(now or now_local(tz), tz)
        today = now.date()

        session = classroom.to_session(self._attendance.get_session_dates(class_id))
        if session.index_of(today) < 0:
            raise DateNotFoundError(f"{today.isoformat()} is not a session date of this class")

        record = self._attendance.get_record(class_id, student_name)
        if record is None:
            raise NotFoundError(f"{student_name} is not on the roster of this class")

        self._check_distance(classroom, location)

        code = ledger.classify(
            session.start_time,
            session.late_threshold_minutes,
            session.absent_threshold_minutes,
            now,
            tz,
            factory=self._factory,
        )
        updated = ledger.record_checkin(session, record, today, code)
        self._attendance.save_record(class_id, updated)

        logger.info("Check-in %s/%s on %s recorded as %r", class_id, student_name, today, code.value)
        return CheckinOutcome(class_id=class_id, student_name=student_name, session_date=today, code=code)

    def sweep_absences(self, *, now: datetime | None = None, today: date | None = None) -> SweepSummary:
        """End-of-day pass: unrecorded slots for today become absent.

        ``today`` defaults to the current date in each class's own time zone.
        """
        scanned = 0
        marked = 0
        for classroom in self._classes.list_all():
            day = today or to_local(now or now_local(classroom.tzinfo), classroom.tzinfo).date()
            session = classroom.to_session(self._attendance.get_session_dates(classroom.class_id))
            if session.index_of(day) < 0:
                logger.debug("Class %s has no session on %s", classroom.class_id, day)
                continue

            scanned += 1
            records = self._attendance.list_records(classroom.class_id)
            for before, after in zip(records, ledger.sweep_absences(session, records, day)):
                if after != before:
                    self._attendance.save_record(classroom.class_id, after)
                    marked += 1
                    logger.info("Marked %s absent in class %s on %s", after.student_name, classroom.class_id, day)

        logger.info("Absence sweep done: %d class(es) in session, %d record(s) marked", scanned, marked)
        return SweepSummary(classes_scanned=scanned, records_marked=marked)

    def get_roster(
        self, *, current_user: CurrentUser, class_id: str
    ) -> tuple[tuple[date, ...], Sequence[AttendanceRecord]]:
        """Dates and records, padded to the date count.

        Students only see their own row.
        """
        classroom = self._get_class(class_id)
        dates = self._attendance.get_session_dates(class_id)

        if current_user.is_instructor:
            require_owner(current_user, classroom)
            records = self._attendance.list_records(class_id)
        else:
            own = self._attendance.get_record(class_id, current_user.display_name)
            if own is None:
                raise NotFoundError("You are not on the roster of this class")
            records = [own]

        return dates, [AttendanceRecord(r.student_name, r.aligned(len(dates))) for r in records]

    def export_csv(self, *, current_user: CurrentUser, class_id: str) -> str:
        classroom = self._get_class(class_id)
        require_owner(current_user, classroom)
        return export_csv(self._attendance.get_session_dates(class_id), self._attendance.list_records(class_id))

    def import_csv(self, *, current_user: CurrentUser, class_id: str, text: str) -> int:
        """Replace the roster with an edited sheet; returns the student count."""
        classroom = self._get_class(class_id)
        require_owner(current_user, classroom)

        dates, records = import_csv(text)
        self._attendance.replace_roster(class_id, dates, records)
        logger.info("Class %s roster replaced: %d date(s), %d student(s)", class_id, len(dates), len(records))
        return len(records)
