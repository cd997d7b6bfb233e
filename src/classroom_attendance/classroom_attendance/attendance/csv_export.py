from __future__ import annotations

import csv
import io
from datetime import date
from typing import Sequence

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.constants import CSV_DATES_HEADER
from ..core.enums import AttendanceCode
from ..core.exceptions import ValidationError
from .model import AttendanceRecord


def export_csv(dates: Sequence[date], records: Sequence[AttendanceRecord]) -> str:
    """Render ``dates,<d1>,...`` followed by one ``name,<c1>,...`` row per student."""

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow([CSV_DATES_HEADER, *(format_iso_date(d) for d in dates)])
    for record in records:
        writer.writerow([record.student_name, *(c.value for c in record.aligned(len(dates)))])
    return out.getvalue()


def import_csv(text: str) -> tuple[tuple[date, ...], list[AttendanceRecord]]:
    """Parse an exported sheet back into ``(dates, records)``.

    Short rows are padded with empty codes.
    """

    rows = [row for row in csv.reader(io.StringIO(text.lstrip("\ufeff"))) if any(cell.strip() for cell in row)]
    if not rows or rows[0][0].strip().lower() != CSV_DATES_HEADER:
        raise ValidationError(f"CSV must start with a '{CSV_DATES_HEADER}' header row")

    try:
        dates = tuple(parse_iso_date(cell) for cell in rows[0][1:] if cell.strip())
    except ValueError as e:
        raise ValidationError(f"Invalid date in CSV header: {e}") from None
    if len(set(dates)) != len(dates):
        raise ValidationError("CSV header contains duplicate dates")

    records: list[AttendanceRecord] = []
    seen: set[str] = set()
    for line_no, row in enumerate(rows[1:], start=2):
        name = row[0]
        if not name.strip():
            raise ValidationError(f"Missing student name on line {line_no}")
        if name in seen:
            raise ValidationError(f"Duplicate student {name!r} on line {line_no}")
        seen.add(name)

        cells = [cell.strip().upper() for cell in row[1:]]
        if any(cells[len(dates):]):
            raise ValidationError(f"Line {line_no} has more codes than dates")
        try:
            codes = tuple(AttendanceCode(c) for c in cells[: len(dates)])
        except ValueError:
            raise ValidationError(f"Unknown attendance code on line {line_no}") from None
        codes += (AttendanceCode.EMPTY,) * (len(dates) - len(codes))
        records.append(AttendanceRecord(student_name=name, codes=codes))

    return dates, records
