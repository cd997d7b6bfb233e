from __future__ import annotations

import re
from datetime import datetime, timedelta

import pytest

from src.classroom_attendance.classroom_attendance.core.enums import AttendanceCode
from src.classroom_attendance.classroom_attendance.core.exceptions import (
    AuthorizationError,
    ExpiredError,
    NotFoundError,
    ValidationError,
)
from src.classroom_attendance.classroom_attendance.invites.codes import generate_code

ISSUED_AT = datetime(2024, 9, 1, 12, 0, 0)


def test_generate_code_format():
    codes = {generate_code() for _ in range(50)}
    assert all(re.fullmatch(r"INV-[0-9A-Z]{9}", c) for c in codes)
    assert len(codes) > 1


def test_issue_sets_four_hour_expiry(container, classroom, instructor, invites_repo):
    invite = container.invite_service.issue(current_user=instructor, class_id="c1", now=ISSUED_AT)

    assert invite.expires_at == ISSUED_AT + timedelta(hours=4)
    assert invites_repo.get(invite.code) == invite


def test_issue_requires_class_owner(container, classroom, student):
    with pytest.raises(AuthorizationError):
        container.invite_service.issue(current_user=student, class_id="c1", now=ISSUED_AT)
    with pytest.raises(NotFoundError):
        container.invite_service.issue(current_user=student, class_id="missing", now=ISSUED_AT)


def test_redeem_until_expiry(container, classroom, instructor):
    invite = container.invite_service.issue(current_user=instructor, class_id="c1", now=ISSUED_AT)

    assert container.invite_service.redeem(invite.code, now=invite.expires_at) == "c1"
    assert container.invite_service.redeem(invite.code.lower(), now=ISSUED_AT) == "c1"
    with pytest.raises(ExpiredError):
        container.invite_service.redeem(invite.code, now=invite.expires_at + timedelta(seconds=1))
    with pytest.raises(NotFoundError):
        container.invite_service.redeem("INV-000000000", now=ISSUED_AT)


def test_join_class_creates_empty_record_sized_to_dates(
    container, classroom, instructor, student, classes_repo, attendance_repo
):
    attendance_repo.records["c1"].pop("Ada")
    invite = container.invite_service.issue(current_user=instructor, class_id="c1", now=ISSUED_AT)

    joined = container.invite_service.join_class(current_user=student, code=invite.code, now=ISSUED_AT)

    assert joined.class_id == "c1"
    assert classes_repo.is_enrolled("c1", student.uid)
    assert attendance_repo.get_record("c1", "Ada").codes == (AttendanceCode.EMPTY, AttendanceCode.EMPTY)

    with pytest.raises(ValidationError):
        container.invite_service.join_class(current_user=student, code=invite.code, now=ISSUED_AT)


def test_join_class_leaves_no_orphan_record_when_enrollment_fails(
    container, classroom, instructor, student, classes_repo, attendance_repo, monkeypatch
):
    attendance_repo.records["c1"].pop("Ada")
    invite = container.invite_service.issue(current_user=instructor, class_id="c1", now=ISSUED_AT)

    def unavailable(class_id, user_uid, record=None):
        raise RuntimeError("database unavailable")

    with monkeypatch.context() as m:
        m.setattr(classes_repo, "enroll", unavailable)
        with pytest.raises(RuntimeError):
            container.invite_service.join_class(current_user=student, code=invite.code, now=ISSUED_AT)

    assert attendance_repo.get_record("c1", "Ada") is None
    assert not classes_repo.is_enrolled("c1", student.uid)

    container.invite_service.join_class(current_user=student, code=invite.code, now=ISSUED_AT)
    assert attendance_repo.get_record("c1", "Ada").codes == (AttendanceCode.EMPTY, AttendanceCode.EMPTY)


def test_join_class_refuses_name_already_on_roster(container, classroom, instructor, student):
    invite = container.invite_service.issue(current_user=instructor, class_id="c1", now=ISSUED_AT)

    with pytest.raises(ValidationError):
        container.invite_service.join_class(current_user=student, code=invite.code, now=ISSUED_AT)


def test_qr_png_is_a_png(container):
    png = container.invite_service.qr_png("INV-ABCDEFGHI")
    assert png.startswith(b"\x89PNG")
