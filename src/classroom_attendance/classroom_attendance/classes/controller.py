from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_iso_date, parse_iso_date, parse_time_of_day
from ..common.http import error_response, server_error
from ..core.exceptions import DomainError, ValidationError
from ..users.session import current_user, login_required


def parse_dates(value) -> list[date]:
    """Accept a JSON list or a comma-separated string of YYYY-MM-DD dates."""
    if value is None:
        return []
    parts = value.split(",") if isinstance(value, str) else list(value)
    try:
        return [parse_iso_date(str(p)) for p in parts if str(p).strip()]
    except ValueError:
        raise ValidationError("Dates must be formatted YYYY-MM-DD") from None


def register(app: Flask, container) -> None:
    @app.route("/api/classes", methods=["GET"], endpoint="classes_list")
    @login_required
    def classes_list():
        classes = container.class_service.list_for(current_user())
        return jsonify({"success": True, "classes": [c.to_dict() for c in classes]})

    @app.route("/api/classes", methods=["POST"], endpoint="classes_create")
    @login_required
    def classes_create():
        data = request.get_json(silent=True) or {}
        try:
            try:
                start_time = parse_time_of_day(str(data.get("class_start_time") or ""))
            except ValueError:
                raise ValidationError("class_start_time must be formatted HH:MM") from None

            classroom = container.class_service.create_class(
                current_user=current_user(),
                class_name=str(data.get("class_name") or ""),
                start_time=start_time,
                late_minutes=data.get("late_minutes", 0),
                absent_minutes=data.get("absent_minutes", 0),
                dates=parse_dates(data.get("dates")),
                timezone=data.get("timezone") or None,
            )
            return jsonify({"success": True, "class": classroom.to_dict()}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            app.logger.exception("Failed to create class")
            return server_error("System error while creating the class")

    @app.route("/api/classes/<class_id>", methods=["GET"], endpoint="classes_show")
    @login_required
    def classes_show(class_id: str):
        try:
            classroom = container.class_service.get_class(class_id)
        except DomainError as e:
            return error_response(e)
        dates = container.attendance_repo.get_session_dates(class_id)
        return jsonify({"success": True, "class": classroom.to_dict(), "dates": [format_iso_date(d) for d in dates]})

    @app.route("/api/classes/<class_id>", methods=["DELETE"], endpoint="classes_delete")
    @login_required
    def classes_delete(class_id: str):
        try:
            container.class_service.delete_class(current_user=current_user(), class_id=class_id)
            return jsonify({"success": True})
        except DomainError as e:
            return error_response(e)
        except Exception:
            app.logger.exception("Failed to delete class %s", class_id)
            return server_error("System error while deleting the class")

    @app.route("/api/classes/<class_id>/dates", methods=["POST"], endpoint="classes_add_dates")
    @login_required
    def classes_add_dates(class_id: str):
        data = request.get_json(silent=True) or {}
        try:
            dates = container.class_service.add_session_dates(
                current_user=current_user(),
                class_id=class_id,
                dates=parse_dates(data.get("dates")),
            )
            return jsonify({"success": True, "dates": [format_iso_date(d) for d in dates]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            app.logger.exception("Failed to add dates to class %s", class_id)
            return server_error("System error while adding session dates")

    @app.route("/api/classes/<class_id>/location", methods=["PUT"], endpoint="classes_location")
    @login_required
    def classes_location(class_id: str):
        data = request.get_json(silent=True) or {}
        try:
            location = container.class_service.update_location(
                current_user=current_user(),
                class_id=class_id,
                location=str(data.get("location") or ""),
            )
            return jsonify({"success": True, "location": location})
        except DomainError as e:
            return error_response(e)
        except Exception:
            app.logger.exception("Failed to update location of class %s", class_id)
            return server_error("System error while updating the location")
