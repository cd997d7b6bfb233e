from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .codec import decode_codes, decode_dates, encode_codes, encode_dates
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_session_dates(self, class_id: str) -> tuple[date, ...]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT session_dates FROM classes WHERE class_id=%s", (class_id,))
            r = fetchone(cur)
            return decode_dates(r["session_dates"]) if r else ()

    def set_session_dates(self, class_id: str, dates: Sequence[date]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE classes SET session_dates=%s WHERE class_id=%s", (encode_dates(dates), class_id))

    def get_record(self, class_id: str, student_name: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_name, attendance FROM class_students WHERE class_id=%s AND student_name=%s",
                (class_id, student_name),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceRecord(student_name=r["student_name"], codes=decode_codes(r["attendance"]))

    def list_records(self, class_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT student_name, attendance FROM class_students WHERE class_id=%s ORDER BY student_name",
                (class_id,),
            )
            return [
                AttendanceRecord(student_name=r["student_name"], codes=decode_codes(r["attendance"]))
                for r in fetchall(cur)
            ]

    def save_record(self, class_id: str, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_students(class_id, student_name, attendance)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE attendance=VALUES(attendance)
                """,
                (class_id, record.student_name, encode_codes(record.codes)),
            )

    def replace_roster(self, class_id: str, dates: Sequence[date], records: Sequence[AttendanceRecord]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE classes SET session_dates=%s WHERE class_id=%s", (encode_dates(dates), class_id))
            cur.execute("DELETE FROM class_students WHERE class_id=%s", (class_id,))
            if records:
                cur.executemany(
                    "INSERT INTO class_students(class_id, student_name, attendance) VALUES(%s,%s,%s)",
                    [(class_id, r.student_name, encode_codes(r.codes)) for r in records],
                )
