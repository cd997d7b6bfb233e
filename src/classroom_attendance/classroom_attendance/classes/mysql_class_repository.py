from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..attendance.codec import encode_codes, encode_dates
from ..attendance.model import AttendanceRecord
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import Classroom
from .repository import ClassRepository

_COLUMNS = """
    c.class_id, c.class_name, c.creator_email, c.class_start_time,
    c.late_minutes, c.absent_minutes, c.timezone, c.checkin_location
"""


def _to_classroom(r: dict) -> Classroom:
    return Classroom(
        class_id=str(r["class_id"]),
        class_name=r["class_name"],
        creator_email=r["creator_email"],
        start_time=normalize_mysql_time(r["class_start_time"]),
        late_minutes=int(r["late_minutes"]),
        absent_minutes=int(r["absent_minutes"]),
        timezone=r["timezone"],
        checkin_location=r.get("checkin_location"),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, class_id: str) -> Optional[Classroom]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes c WHERE c.class_id=%s", (class_id,))
            r = fetchone(cur)
            return _to_classroom(r) if r else None

    def create(self, classroom: Classroom, session_dates: Sequence[date] = ()) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO classes(class_id, class_name, creator_email, class_start_time,
                                    late_minutes, absent_minutes, timezone, checkin_location, session_dates)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    classroom.class_id,
                    classroom.class_name,
                    classroom.creator_email,
                    classroom.start_time,
                    classroom.late_minutes,
                    classroom.absent_minutes,
                    classroom.timezone,
                    classroom.checkin_location,
                    encode_dates(session_dates),
                ),
            )

    def delete(self, class_id: str) -> bool:
        # Roster, enrollments and invites go with it (ON DELETE CASCADE).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE class_id=%s", (class_id,))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[Classroom]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes c ORDER BY c.created_at")
            return [_to_classroom(r) for r in fetchall(cur)]

    def list_by_creator(self, creator_email: str) -> Sequence[Classroom]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM classes c WHERE c.creator_email=%s ORDER BY c.created_at",
                (creator_email,),
            )
            return [_to_classroom(r) for r in fetchall(cur)]

    def list_for_user(self, user_uid: str) -> Sequence[Classroom]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM class_enrollments e
                JOIN classes c ON c.class_id = e.class_id
                WHERE e.user_uid=%s
                ORDER BY e.enrolled_at
                """,
                (user_uid,),
            )
            return [_to_classroom(r) for r in fetchall(cur)]

    def update_location(self, class_id: str, location: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE classes SET checkin_location=%s WHERE class_id=%s", (location, class_id))
            return cur.rowcount > 0

    def is_enrolled(self, class_id: str, user_uid: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM class_enrollments WHERE class_id=%s AND user_uid=%s",
                (class_id, user_uid),
            )
            return fetchone(cur) is not None

    def enroll(self, class_id: str, user_uid: str, record: Optional[AttendanceRecord] = None) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            if record is not None:
                cur.execute(
                    "INSERT INTO class_students(class_id, student_name, attendance) VALUES(%s,%s,%s)",
                    (class_id, record.student_name, encode_codes(record.codes)),
                )
            cur.execute(
                "INSERT IGNORE INTO class_enrollments(class_id, user_uid) VALUES(%s,%s)",
                (class_id, user_uid),
            )
