from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide_checkin(self, *, check_in_time: Optional[datetime], policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
