from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class CurrentUser:
    """Identity claims for the current request, as issued by the auth provider.

    Passed explicitly to every role-gated operation.
    """

    uid: str
    display_name: str
    email: str
    role: Role

    @property
    def is_instructor(self) -> bool:
        return self.role == Role.INSTRUCTOR
