from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .policy import AttendancePolicy
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, check_in_time: Optional[datetime], policy: AttendancePolicy) -> AttendanceStrategy:
        if check_in_time is None:
            return AbsentStrategy()

        delta = policy.minutes_after_start(check_in_time)
        if delta <= policy.grace_minutes:
            return PresentStrategy()
        if delta <= policy.late_threshold_minutes:
            return LateStrategy()
        return HalfDayStrategy()
