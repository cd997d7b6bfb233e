from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response, server_error
from ..core.exceptions import DomainError
from ..users.session import current_user, login_required


def register(app: Flask, container) -> None:
    @app.route("/api/classes/<class_id>/invites", methods=["POST"], endpoint="invites_issue")
    @login_required
    def invites_issue(class_id: str):
        try:
            invite = container.invite_service.issue(current_user=current_user(), class_id=class_id)
            return jsonify(
                {
                    "success": True,
                    "invite_code": invite.code,
                    "expires_at": invite.expires_at.isoformat(),
                }
            ), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            app.logger.exception("Failed to issue invite for class %s", class_id)
            return server_error("System error while generating the invite code")

    @app.route("/api/invites/join", methods=["POST"], endpoint="invites_join")
    @login_required
    def invites_join():
        data = request.get_json(silent=True) or {}
        try:
            classroom = container.invite_service.join_class(
                current_user=current_user(),
                code=str(data.get("invite_code") or ""),
            )
            return jsonify({"success": True, "class": classroom.to_dict(), "message": "Class joined successfully!"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            app.logger.exception("Failed to join class")
            return server_error("System error while joining the class")

    @app.route("/api/invites/<code>/qr", methods=["GET"], endpoint="invites_qr")
    @login_required
    def invites_qr(code: str):
        try:
            png = container.invite_service.qr_png(code)
        except Exception:
            app.logger.exception("Failed to render QR for invite %s", code)
            return server_error("System error while rendering the invite QR code")
        return app.response_class(png, mimetype="image/png")
