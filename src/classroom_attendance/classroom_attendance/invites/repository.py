from __future__ import annotations

from typing import Optional, Protocol

from .model import Invite


class InviteRepository(Protocol):
    def save(self, invite: Invite) -> None:
        raise NotImplementedError

    def get(self, code: str) -> Optional[Invite]:
        raise NotImplementedError
