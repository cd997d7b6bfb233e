"""Comma-delimited encoding used at the storage boundary.

A student's whole history is one string (``"O,L,,A"``) positionally
aligned with the class's date string (``"2024-09-03,2024-09-05,..."``).
"""

from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.enums import AttendanceCode
from ..core.exceptions import ValidationError

DELIMITER = ","


def encode_codes(codes: Sequence[AttendanceCode]) -> str:
    return DELIMITER.join(AttendanceCode(c).value for c in codes)


def decode_codes(value: str | None) -> tuple[AttendanceCode, ...]:
    if not value:
        return ()
    try:
        return tuple(AttendanceCode(part.strip()) for part in value.split(DELIMITER))
    except ValueError:
        raise ValidationError(f"Corrupt attendance string: {value!r}") from None


def encode_dates(dates: Sequence[date]) -> str:
    return DELIMITER.join(format_iso_date(d) for d in dates)


def decode_dates(value: str | None) -> tuple[date, ...]:
    if not value:
        return ()
    return tuple(parse_iso_date(part) for part in value.split(DELIMITER) if part.strip())
