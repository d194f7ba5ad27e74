from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No check-in at all.

    Only reachable through explicit classification; the lifecycle never stores
    a record without a check-in, so stored records do not carry ABSENT.
    """

    def decide_checkin(self, *, check_in_time: Optional[datetime], policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)
