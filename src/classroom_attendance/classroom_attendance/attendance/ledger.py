"""Attendance ledger: pure functions over ClassSession / AttendanceRecord.

Nothing here touches storage. Callers persist the returned records.
"""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from typing import Iterable, Optional

from ..common.datetime_utils import minutes_since_midnight, to_local
from ..core.enums import AttendanceCode
from ..core.exceptions import DateNotFoundError
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, ClassSession

_factory = AttendanceStrategyFactory()


def classify(
    start_time: time,
    late_threshold_minutes: int,
    absent_threshold_minutes: int,
    checkin_instant: datetime,
    tz: Optional[tzinfo] = None,
    *,
    factory: AttendanceStrategyFactory | None = None,
) -> AttendanceCode:
    """Code to record for a check-in at ``checkin_instant``.

    Raises TooEarlyError before the window opens and
    InvalidConfigurationError for inconsistent thresholds.
    """
    start_minute = minutes_since_midnight(start_time)
    now_minute = minutes_since_midnight(to_local(checkin_instant, tz))

    strategy = (factory or _factory).for_checkin(
        now_minute=now_minute,
        start_minute=start_minute,
        late_minutes=int(late_threshold_minutes),
        absent_minutes=int(absent_threshold_minutes),
    )
    return strategy.decide_checkin(now_minute=now_minute, start_minute=start_minute).code


def record_checkin(
    session: ClassSession,
    record: AttendanceRecord,
    session_date: date,
    code: AttendanceCode,
) -> AttendanceRecord:
    index = session.index_of(session_date)
    if index < 0:
        raise DateNotFoundError(f"{session_date.isoformat()} is not a session date of this class")

    codes = list(record.aligned(len(session.session_dates)))
    codes[index] = AttendanceCode(code)
    return AttendanceRecord(student_name=record.student_name, codes=tuple(codes))


def sweep_absences(
    session: ClassSession,
    records: Iterable[AttendanceRecord],
    today: date,
) -> list[AttendanceRecord]:
    """Mark every unrecorded slot for ``today`` as absent.

    Filled slots are left alone, so running twice is a no-op.
    """
    index = session.index_of(today)
    if index < 0:
        return list(records)

    out: list[AttendanceRecord] = []
    for record in records:
        if record.code_at(index) == AttendanceCode.EMPTY:
            record = record_checkin(session, record, today, AttendanceCode.ABSENT)
        out.append(record)
    return out
