from __future__ import annotations

from ...core.enums import AttendanceCode
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Check-in inside the window, no later than the late threshold."""

    def decide_checkin(self, *, now_minute: int, start_minute: int) -> StatusDecision:
        return StatusDecision(code=AttendanceCode.ON_TIME)
