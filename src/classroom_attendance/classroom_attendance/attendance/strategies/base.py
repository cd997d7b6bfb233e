from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceCode


@dataclass(frozen=True)
class StatusDecision:
    code: AttendanceCode
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance code."""

    @abstractmethod
    def decide_checkin(self, *, now_minute: int, start_minute: int) -> StatusDecision:
        raise NotImplementedError
