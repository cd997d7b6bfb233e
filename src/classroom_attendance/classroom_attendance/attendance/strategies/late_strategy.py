from __future__ import annotations

from ...core.enums import AttendanceCode
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, now_minute: int, start_minute: int) -> StatusDecision:
        return StatusDecision(code=AttendanceCode.LATE, note=f"{now_minute - start_minute} min after start")
