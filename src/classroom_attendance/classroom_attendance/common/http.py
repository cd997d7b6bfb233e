from __future__ import annotations

from flask import jsonify

from ..core.exceptions import AuthorizationError, DomainError, ExpiredError, NotFoundError


def error_response(e: DomainError):
    """Domain error as ``{"success": false, "error": kind, "message": ...}``."""

    if isinstance(e, AuthorizationError):
        status = 403
    elif isinstance(e, NotFoundError):
        status = 404
    elif isinstance(e, ExpiredError):
        status = 410
    else:
        status = 400
    return jsonify({"success": False, "error": e.kind, "message": str(e)}), status


def server_error(message: str):
    return jsonify({"success": False, "error": "ServerError", "message": message}), 500
