from __future__ import annotations

import io
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from src.classroom_attendance.classroom_attendance.attendance import service as attendance_service_module
from src.classroom_attendance.classroom_attendance.main import create_app


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


def _sign_in(client, user):
    resp = client.post(
        "/api/session",
        json={"uid": user.uid, "display_name": user.display_name, "email": user.email, "role": user.role.value},
    )
    assert resp.status_code == 200


def test_requires_session(client):
    resp = client.get("/api/classes")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Unauthenticated"


def test_session_rejects_unknown_role(client):
    resp = client.post("/api/session", json={"uid": "u1", "display_name": "X", "role": "admin"})
    assert resp.status_code == 400


def test_instructor_creates_class_and_invites_student(client, instructor, student, monkeypatch):
    _sign_in(client, instructor)
    resp = client.post(
        "/api/classes",
        json={
            "class_name": "Compilers",
            "class_start_time": "09:00",
            "late_minutes": 10,
            "absent_minutes": 30,
            "dates": "2024-09-03,2024-09-05",
        },
    )
    assert resp.status_code == 201
    class_id = resp.get_json()["class"]["class_id"]

    resp = client.post(f"/api/classes/{class_id}/invites")
    assert resp.status_code == 201
    code = resp.get_json()["invite_code"]

    _sign_in(client, student)
    resp = client.post("/api/invites/join", json={"invite_code": code})
    assert resp.status_code == 200
    assert [c["class_id"] for c in client.get("/api/classes").get_json()["classes"]] == [class_id]

    monkeypatch.setattr(
        attendance_service_module, "now_local", lambda tz=None: datetime(2024, 9, 3, 9, 25, tzinfo=timezone.utc)
    )
    resp = client.post(f"/api/classes/{class_id}/checkin", json={})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["code"] == "L"
    assert body["date"] == "2024-09-03"

    roster = client.get(f"/api/classes/{class_id}/attendance").get_json()
    assert roster["students"] == {"Ada": ["L", ""]}


def test_checkin_errors_are_structured(client, classroom, student, monkeypatch):
    _sign_in(client, student)
    monkeypatch.setattr(attendance_service_module, "now_local", lambda tz=None: datetime(2024, 9, 3, 7, 0))

    resp = client.post("/api/classes/c1/checkin", json={})
    assert resp.status_code == 400
    assert resp.get_json() == {
        "success": False,
        "error": "TooEarly",
        "message": "The soonest you can check in is 60 minutes before the class start time",
    }

    resp = client.post("/api/classes/missing/checkin", json={})
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NotFound"


def test_csv_export_and_import(client, classroom, instructor):
    _sign_in(client, instructor)

    resp = client.get("/api/classes/c1/attendance.csv")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "Algorithms.csv" in resp.headers["Content-Disposition"]
    assert resp.data.decode("utf-8-sig").splitlines() == ["dates,2024-09-03,2024-09-05", "Ada,,", "Grace,,"]

    resp = client.put("/api/classes/c1/attendance.csv", data="dates,2024-09-03\nAda,O\n", content_type="text/csv")
    assert resp.status_code == 200
    assert resp.get_json()["students"] == 1

    resp = client.put("/api/classes/c1/attendance.csv", data="nonsense", content_type="text/csv")
    assert resp.status_code == 400


def test_csv_export_filename_survives_awkward_class_names(client, classes_repo, classroom, instructor):
    _sign_in(client, instructor)
    resp = client.post(
        "/api/classes",
        json={"class_name": "Algo\nSection 2", "class_start_time": "09:00", "dates": "2024-09-03"},
    )
    assert resp.status_code == 201
    class_id = resp.get_json()["class"]["class_id"]

    resp = client.get(f"/api/classes/{class_id}/attendance.csv")
    assert resp.status_code == 200
    assert "Algo_Section 2.csv" in resp.headers["Content-Disposition"]

    classes_repo.classes["c1"] = replace(classes_repo.classes["c1"], class_name="Caf\u00e9 \u6570\u5b66")
    resp = client.get("/api/classes/c1/attendance.csv")
    assert resp.status_code == 200
    assert "filename*=UTF-8''Caf%C3%A9%20%E6%95%B0%E5%AD%A6.csv" in resp.headers["Content-Disposition"]


def test_csv_import_rejects_non_utf8_upload(client, classroom, instructor, attendance_repo):
    _sign_in(client, instructor)

    resp = client.put(
        "/api/classes/c1/attendance.csv",
        data={"file": (io.BytesIO(b"dates,2024-09-03\nJos\xe9,O\n"), "roster.csv")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"
    assert attendance_repo.get_record("c1", "Ada") is not None


def test_instructor_checkin_is_forbidden(client, classroom, instructor, fixed_now, monkeypatch):
    _sign_in(client, instructor)
    monkeypatch.setattr(attendance_service_module, "now_local", lambda tz=None: fixed_now)

    resp = client.post("/api/classes/c1/checkin", json={})
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Forbidden"


def test_student_cannot_delete_class(client, classroom, student):
    _sign_in(client, student)
    resp = client.delete("/api/classes/c1")
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Forbidden"


def test_expired_invite_is_gone(client, classroom, instructor, student, container):
    invite = container.invite_service.issue(current_user=instructor, class_id="c1", now=datetime(2000, 1, 1))

    _sign_in(client, student)
    resp = client.post("/api/invites/join", json={"invite_code": invite.code})
    assert resp.status_code == 410
    assert resp.get_json()["error"] == "Expired"


def test_invite_qr_image(client, student):
    _sign_in(client, student)
    resp = client.get("/api/invites/INV-ABCDEFGHI/qr")
    assert resp.status_code == 200
    assert resp.mimetype == "image/png"


def test_invite_qr_failure_is_a_structured_500(client, container, student, monkeypatch):
    def broken(code):
        raise RuntimeError("encoder unavailable")

    monkeypatch.setattr(container.invite_service, "qr_png", broken)
    _sign_in(client, student)
    resp = client.get("/api/invites/INV-ABCDEFGHI/qr")

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "ServerError"
    assert "encoder unavailable" not in resp.get_json()["message"]


def test_sweep_cli(app, classroom, attendance_repo):
    result = app.test_cli_runner().invoke(args=["sweep-absences", "--date", "2024-09-03"])

    assert result.exit_code == 0
    assert "marked 2 record(s)" in result.output
    assert attendance_repo.get_record("c1", "Grace").codes[0].value == "A"
