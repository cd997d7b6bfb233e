from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Invite
from .repository import InviteRepository


class MySQLInviteRepository(InviteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, invite: Invite) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO invite_codes(code, class_id, expires_at)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE class_id=VALUES(class_id), expires_at=VALUES(expires_at)
                """,
                (invite.code, invite.class_id, invite.expires_at),
            )

    def get(self, code: str) -> Optional[Invite]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT code, class_id, expires_at FROM invite_codes WHERE code=%s", (code,))
            r = fetchone(cur)
            if not r:
                return None
            return Invite(code=r["code"], class_id=str(r["class_id"]), expires_at=r["expires_at"])
