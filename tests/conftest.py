from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional, Sequence

import pytest

from src.classroom_attendance.classroom_attendance.attendance.model import AttendanceRecord
from src.classroom_attendance.classroom_attendance.classes.model import Classroom
from src.classroom_attendance.classroom_attendance.container import build_services
from src.classroom_attendance.classroom_attendance.core.enums import Role
from src.classroom_attendance.classroom_attendance.invites.model import Invite
from src.classroom_attendance.classroom_attendance.users.model import CurrentUser


class InMemoryAttendance:
    def __init__(self):
        self.dates: dict[str, tuple[date, ...]] = {}
        self.records: dict[str, dict[str, AttendanceRecord]] = {}
        self.writes = 0

    def get_session_dates(self, class_id: str) -> tuple[date, ...]:
        return self.dates.get(class_id, ())

    def set_session_dates(self, class_id: str, dates: Sequence[date]) -> None:
        self.dates[class_id] = tuple(dates)

    def get_record(self, class_id: str, student_name: str) -> Optional[AttendanceRecord]:
        return self.records.get(class_id, {}).get(student_name)

    def list_records(self, class_id: str) -> Sequence[AttendanceRecord]:
        return sorted(self.records.get(class_id, {}).values(), key=lambda r: r.student_name)

    def save_record(self, class_id: str, record: AttendanceRecord) -> None:
        self.writes += 1
        self.records.setdefault(class_id, {})[record.student_name] = record

    def replace_roster(self, class_id: str, dates: Sequence[date], records: Sequence[AttendanceRecord]) -> None:
        self.dates[class_id] = tuple(dates)
        self.records[class_id] = {r.student_name: r for r in records}


class InMemoryClasses:
    def __init__(self, attendance: InMemoryAttendance):
        self._attendance = attendance
        self.classes: dict[str, Classroom] = {}
        self.enrollments: set[tuple[str, str]] = set()

    def get(self, class_id: str) -> Optional[Classroom]:
        return self.classes.get(class_id)

    def create(self, classroom: Classroom, session_dates: Sequence[date] = ()) -> None:
        self.classes[classroom.class_id] = classroom
        self._attendance.set_session_dates(classroom.class_id, session_dates)

    def delete(self, class_id: str) -> bool:
        if class_id not in self.classes:
            return False
        del self.classes[class_id]
        self._attendance.dates.pop(class_id, None)
        self._attendance.records.pop(class_id, None)
        self.enrollments = {(c, u) for (c, u) in self.enrollments if c != class_id}
        return True

    def list_all(self) -> Sequence[Classroom]:
        return list(self.classes.values())

    def list_by_creator(self, creator_email: str) -> Sequence[Classroom]:
        return [c for c in self.classes.values() if c.creator_email == creator_email]

    def list_for_user(self, user_uid: str) -> Sequence[Classroom]:
        return [self.classes[c] for (c, u) in sorted(self.enrollments) if u == user_uid and c in self.classes]

    def update_location(self, class_id: str, location: str) -> bool:
        classroom = self.classes.get(class_id)
        if not classroom:
            return False
        self.classes[class_id] = replace(classroom, checkin_location=location)
        return True

    def is_enrolled(self, class_id: str, user_uid: str) -> bool:
        return (class_id, user_uid) in self.enrollments

    def enroll(self, class_id: str, user_uid: str, record: Optional[AttendanceRecord] = None) -> None:
        if record is not None:
            self._attendance.records.setdefault(class_id, {})[record.student_name] = record
        self.enrollments.add((class_id, user_uid))


class InMemoryInvites:
    def __init__(self):
        self.invites: dict[str, Invite] = {}

    def save(self, invite: Invite) -> None:
        self.invites[invite.code] = invite

    def get(self, code: str) -> Optional[Invite]:
        return self.invites.get(code)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 9, 3, 9, 5, 0)


@pytest.fixture
def instructor() -> CurrentUser:
    return CurrentUser(uid="u-teach", display_name="Prof Lee", email="lee@school.edu", role=Role.INSTRUCTOR)


@pytest.fixture
def student() -> CurrentUser:
    return CurrentUser(uid="u-ada", display_name="Ada", email="ada@school.edu", role=Role.STUDENT)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def classes_repo(attendance_repo) -> InMemoryClasses:
    return InMemoryClasses(attendance_repo)


@pytest.fixture
def invites_repo() -> InMemoryInvites:
    return InMemoryInvites()


@pytest.fixture
def container(classes_repo, attendance_repo, invites_repo):
    return build_services(
        classes_repo=classes_repo,
        attendance_repo=attendance_repo,
        invites_repo=invites_repo,
        settings={"CLASS_TIMEZONE": "UTC", "INVITE_TTL_HOURS": 4, "CHECKIN_RADIUS_METERS": 100},
    )


@pytest.fixture
def classroom(classes_repo, attendance_repo) -> Classroom:
    """09:00 class, late after 10 min, absent after 30 min, two session dates, two students."""
    c = Classroom(
        class_id="c1",
        class_name="Algorithms",
        creator_email="lee@school.edu",
        start_time=time(9, 0),
        late_minutes=10,
        absent_minutes=30,
        timezone="UTC",
    )
    classes_repo.create(c, (date(2024, 9, 3), date(2024, 9, 5)))
    attendance_repo.save_record("c1", AttendanceRecord.empty("Ada", 2))
    attendance_repo.save_record("c1", AttendanceRecord.empty("Grace", 2))
    attendance_repo.writes = 0
    return c
