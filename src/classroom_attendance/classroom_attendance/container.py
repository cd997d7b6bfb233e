from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .core.constants import DEFAULT_CHECKIN_RADIUS_METERS, DEFAULT_CLASS_TIMEZONE, DEFAULT_INVITE_TTL_HOURS
from .database.connection import DatabaseConnection, DBConfig
from .invites.mysql_invite_repository import MySQLInviteRepository
from .invites.repository import InviteRepository
from .invites.service import InviteService


@dataclass(frozen=True)
class Container:
    classes_repo: ClassRepository
    attendance_repo: AttendanceRepository
    invites_repo: InviteRepository

    class_service: ClassService
    attendance_service: AttendanceService
    invite_service: InviteService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    classes_repo: ClassRepository,
    attendance_repo: AttendanceRepository,
    invites_repo: InviteRepository,
    settings: dict | None = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    settings = settings or {}

    class_service = ClassService(
        classes_repo,
        attendance_repo,
        default_timezone=str(settings.get("CLASS_TIMEZONE", DEFAULT_CLASS_TIMEZONE)),
    )
    attendance_service = AttendanceService(
        attendance_repo,
        classes_repo,
        strategy_factory=AttendanceStrategyFactory(),
        checkin_radius_meters=float(settings.get("CHECKIN_RADIUS_METERS", DEFAULT_CHECKIN_RADIUS_METERS)),
    )
    invite_service = InviteService(
        invites_repo,
        classes_repo,
        attendance_repo,
        ttl_hours=float(settings.get("INVITE_TTL_HOURS", DEFAULT_INVITE_TTL_HOURS)),
    )

    return Container(
        classes_repo=classes_repo,
        attendance_repo=attendance_repo,
        invites_repo=invites_repo,
        class_service=class_service,
        attendance_service=attendance_service,
        invite_service=invite_service,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: dict | None = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        classes_repo=MySQLClassRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        invites_repo=MySQLInviteRepository(conn),
        settings=settings,
        conn=conn,
    )
