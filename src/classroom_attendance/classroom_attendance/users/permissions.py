from __future__ import annotations

from ..classes.model import Classroom
from ..core.exceptions import AuthorizationError
from .model import CurrentUser


def require_instructor(current_user: CurrentUser) -> None:
    if not current_user.is_instructor:
        raise AuthorizationError("Only instructors can do this")


def require_owner(current_user: CurrentUser, classroom: Classroom) -> None:
    """Only the instructor who created the class may change it."""
    require_instructor(current_user)
    if current_user.email.lower() != classroom.creator_email.lower():
        raise AuthorizationError("You are not the instructor of this class")
