from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import format_iso_date
from ..common.http import error_response, server_error
from ..core.exceptions import DomainError, ValidationError
from ..users.session import current_user, login_required


def _safe_filename(name: str) -> str:
    return "".join("_" if ch in '/\\?%*:|"<>' or not ch.isprintable() else ch for ch in name)


def register(app: Flask, container) -> None:
    @app.route("/api/classes/<class_id>/checkin", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def attendance_checkin(class_id: str):
        data = request.get_json(silent=True) or {}
        user = current_user()
        try:
            outcome = container.attendance_service.check_in(
                class_id=class_id,
                current_user=user,
                location=data.get("location") or None,
            )
            return jsonify(
                {
                    "success": True,
                    "date": format_iso_date(outcome.session_date),
                    "code": outcome.code.value,
                    "message": f"Attendance recorded for {user.display_name} on {format_iso_date(outcome.session_date)}",
                }
            )
        except DomainError as e:
            app.logger.warning("Check-in rejected for %s in class %s: %s", user.uid, class_id, e)
            return error_response(e)
        except Exception:
            app.logger.exception("Failed to record check-in for class %s", class_id)
            return server_error("System error while recording attendance")

    @app.route("/api/classes/<class_id>/attendance", methods=["GET"], endpoint="attendance_roster")
    @login_required
    def attendance_roster(class_id: str):
        try:
            dates, records = container.attendance_service.get_roster(current_user=current_user(), class_id=class_id)
        except DomainError as e:
            return error_response(e)
        return jsonify(
            {
                "success": True,
                "dates": [format_iso_date(d) for d in dates],
                "students": {r.student_name: [c.value for c in r.codes] for r in records},
            }
        )

    @app.route("/api/classes/<class_id>/attendance.csv", methods=["GET"], endpoint="attendance_export")
    @login_required
    def attendance_export(class_id: str):
        try:
            text = container.attendance_service.export_csv(current_user=current_user(), class_id=class_id)
            classroom = container.class_service.get_class(class_id)
        except DomainError as e:
            return error_response(e)

        return send_file(
            io.BytesIO(text.encode("utf-8-sig")),
            mimetype="text/csv",
            as_attachment=True,
            download_name=f"{_safe_filename(classroom.class_name)}.csv",
        )

    @app.route("/api/classes/<class_id>/attendance.csv", methods=["PUT"], endpoint="attendance_import")
    @login_required
    def attendance_import(class_id: str):
        upload = request.files.get("file")
        try:
            raw = upload.read() if upload else request.get_data()
            try:
                text = raw.decode("utf-8-sig")
            except UnicodeDecodeError:
                raise ValidationError("CSV must be UTF-8 encoded") from None
            count = container.attendance_service.import_csv(current_user=current_user(), class_id=class_id, text=text)
            return jsonify({"success": True, "students": count})
        except DomainError as e:
            return error_response(e)
        except Exception:
            app.logger.exception("Failed to import roster for class %s", class_id)
            return server_error("System error while importing the roster")
