from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import error_response
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .session import current_user, login_required


def register(app: Flask, container) -> None:
    @app.route("/api/session", methods=["POST"], endpoint="session_start")
    def session_start():
        """Store identity claims issued by the upstream auth provider."""
        data = request.get_json(silent=True) or {}
        try:
            uid = require_non_empty(str(data.get("uid") or ""), "uid")
            display_name = require_non_empty(str(data.get("display_name") or ""), "display_name")
            email = str(data.get("email") or "").strip()
            try:
                role = Role(str(data.get("role") or Role.STUDENT.value).lower())
            except ValueError:
                raise ValidationError("role must be 'instructor' or 'student'") from None
            if role == Role.INSTRUCTOR and not email:
                raise ValidationError("email is required for instructors")
        except ValidationError as e:
            return error_response(e)

        session.clear()
        session["uid"] = uid
        session["display_name"] = display_name
        session["email"] = email
        session["role"] = role.value
        app.logger.info("Session started for %s (%s)", uid, role.value)
        return jsonify({"success": True, "user": {"uid": uid, "display_name": display_name, "role": role.value}})

    @app.route("/api/session", methods=["GET"], endpoint="session_show")
    @login_required
    def session_show():
        user = current_user()
        return jsonify({"success": True, "user": {"uid": user.uid, "display_name": user.display_name, "role": user.role.value}})

    @app.route("/api/session", methods=["DELETE"], endpoint="session_end")
    def session_end():
        session.clear()
        return jsonify({"success": True})
