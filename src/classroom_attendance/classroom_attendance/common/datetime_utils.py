from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from typing import Optional

from ..core.constants import DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date (zero padding optional)."""
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) into time."""
    parts = value.strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Invalid time string: {value!r}")
    hours = int(parts[0])
    minutes = int(parts[1])
    seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
    return time(hour=hours, minute=minutes, second=seconds)


def minutes_since_midnight(value: time | datetime) -> int:
    return value.hour * 60 + value.minute


def to_local(instant: datetime, tz: Optional[tzinfo]) -> datetime:
    """Read an instant in the class's time zone.

    Naive datetimes are treated as already local.
    """
    if tz is None or instant.tzinfo is None:
        return instant
    return instant.astimezone(tz)


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current time, in ``tz`` when given (naive server-local otherwise).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)
