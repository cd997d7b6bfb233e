from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import jsonify, session

from ..core.enums import Role
from .model import CurrentUser


def current_user() -> Optional[CurrentUser]:
    if "uid" not in session:
        return None
    return CurrentUser(
        uid=session["uid"],
        display_name=session.get("display_name", ""),
        email=session.get("email", ""),
        role=Role(session.get("role", Role.STUDENT.value)),
    )


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return jsonify({"success": False, "error": "Unauthenticated", "message": "Please sign in to continue"}), 401
        return view(*args, **kwargs)

    return wrapper
