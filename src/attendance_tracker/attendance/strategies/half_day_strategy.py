from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Check-in past the late threshold."""

    def decide_checkin(self, *, check_in_time: Optional[datetime], policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
