from __future__ import annotations

import io
import logging
from datetime import datetime, timedelta
from typing import Callable

import qrcode

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..classes.model import Classroom
from ..classes.repository import ClassRepository
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_INVITE_TTL_HOURS
from ..core.exceptions import ExpiredError, NotFoundError, ValidationError
from ..users.model import CurrentUser
from ..users.permissions import require_owner
from .codes import generate_code, normalize_code
from .model import Invite
from .repository import InviteRepository

logger = logging.getLogger(__name__)


class InviteService:
    def __init__(
        self,
        invites: InviteRepository,
        classes: ClassRepository,
        attendance: AttendanceRepository,
        *,
        ttl_hours: float = DEFAULT_INVITE_TTL_HOURS,
        code_factory: Callable[[], str] = generate_code,
    ):
        self._invites = invites
        self._classes = classes
        self._attendance = attendance
        self._ttl = timedelta(hours=ttl_hours)
        self._code_factory = code_factory

    def issue(self, *, current_user: CurrentUser, class_id: str, now: datetime | None = None) -> Invite:
        classroom = self._classes.get(class_id)
        if not classroom:
            raise NotFoundError("Class not found")
        require_owner(current_user, classroom)

        now = now or now_local()
        invite = Invite(code=self._code_factory(), class_id=class_id, expires_at=now + self._ttl)
        self._invites.save(invite)
        logger.info("Invite %s issued for class %s (expires %s)", invite.code, class_id, invite.expires_at)
        return invite

    def redeem(self, code: str, *, now: datetime | None = None) -> str:
        """Class id the code points at."""
        invite = self._invites.get(normalize_code(code))
        if invite is None:
            raise NotFoundError("Invalid invite code")
        if invite.is_expired(now or now_local()):
            raise ExpiredError("Invite code has expired")
        return invite.class_id

    def join_class(self, *, current_user: CurrentUser, code: str, now: datetime | None = None) -> Classroom:
        class_id = self.redeem(code, now=now)
        classroom = self._classes.get(class_id)
        if not classroom:
            raise NotFoundError("Class not found")

        if self._classes.is_enrolled(class_id, current_user.uid):
            raise ValidationError("Already in the class")
        if self._attendance.get_record(class_id, current_user.display_name) is not None:
            raise ValidationError(f"A student named {current_user.display_name!r} is already on the roster")

        size = len(self._attendance.get_session_dates(class_id))
        self._classes.enroll(class_id, current_user.uid, AttendanceRecord.empty(current_user.display_name, size))

        logger.info("%s (%s) joined class %s", current_user.display_name, current_user.uid, class_id)
        return classroom

    def qr_png(self, code: str) -> bytes:
        """Invite code as a PNG QR image."""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(normalize_code(code))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
