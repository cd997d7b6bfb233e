from __future__ import annotations

from ...core.enums import AttendanceCode
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """Checked in after the absent threshold: counted as absent."""

    def decide_checkin(self, *, now_minute: int, start_minute: int) -> StatusDecision:
        return StatusDecision(code=AttendanceCode.ABSENT, note=f"{now_minute - start_minute} min after start")
