from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import CHECKIN_WINDOW_MINUTES
from ..core.exceptions import InvalidConfigurationError, TooEarlyError
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


def validate_thresholds(late_minutes: int, absent_minutes: int) -> None:
    if late_minutes < 0:
        raise InvalidConfigurationError("Late threshold must be >= 0 minutes")
    if absent_minutes < late_minutes:
        raise InvalidConfigurationError("Absent threshold must be >= late threshold")


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    window_minutes: int = CHECKIN_WINDOW_MINUTES

    def for_checkin(self, *, now_minute: int, start_minute: int, late_minutes: int, absent_minutes: int) -> AttendanceStrategy:
        validate_thresholds(late_minutes, absent_minutes)

        if now_minute < start_minute - self.window_minutes:
            raise TooEarlyError(
                f"The soonest you can check in is {self.window_minutes} minutes before the class start time"
            )
        if now_minute <= start_minute + late_minutes:
            return OnTimeStrategy()
        if now_minute <= start_minute + absent_minutes:
            return LateStrategy()
        return AbsentStrategy()
