from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time, tzinfo
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from ..attendance.model import ClassSession


@dataclass(frozen=True)
class Classroom:
    """Domain entity: a class created by an instructor."""

    class_id: str
    class_name: str
    creator_email: str
    start_time: time
    late_minutes: int
    absent_minutes: int
    timezone: str
    checkin_location: Optional[str] = None

    @property
    def tzinfo(self) -> tzinfo:
        return ZoneInfo(self.timezone)

    def to_session(self, dates: Sequence[date]) -> ClassSession:
        return ClassSession(
            start_time=self.start_time,
            late_threshold_minutes=self.late_minutes,
            absent_threshold_minutes=self.absent_minutes,
            session_dates=tuple(dates),
            timezone=self.tzinfo,
        )

    def to_dict(self) -> dict:
        return {
            "class_id": self.class_id,
            "class_name": self.class_name,
            "creator_email": self.creator_email,
            "class_start_time": self.start_time.strftime("%H:%M"),
            "late_minutes": self.late_minutes,
            "absent_minutes": self.absent_minutes,
            "timezone": self.timezone,
            "checkin_location": self.checkin_location,
        }
