from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Any

from ..common.datetime_utils import minutes_since_midnight, parse_time_of_day
from ..core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_LATE_THRESHOLD_MINUTES, DEFAULT_STANDARD_START
from ..core.exceptions import InvalidArgument


@dataclass(frozen=True)
class AttendancePolicy:
    """Deployment policy for classifying check-ins.

    A check-in up to ``grace_minutes`` after ``standard_start`` is on time, up
    to ``late_threshold_minutes`` it is late, anything later is a half day.
    Both limits are inclusive.
    """

    standard_start: time = DEFAULT_STANDARD_START
    grace_minutes: int = DEFAULT_GRACE_MINUTES
    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES

    def __post_init__(self):
        if int(self.grace_minutes) < 0:
            raise InvalidArgument("grace_minutes must be non-negative")
        if int(self.late_threshold_minutes) < int(self.grace_minutes):
            raise InvalidArgument("late_threshold_minutes must not be lower than grace_minutes")

    @classmethod
    def from_settings(cls, settings: Any) -> "AttendancePolicy":
        return cls(
            standard_start=parse_time_of_day(getattr(settings, "STANDARD_CHECKIN_TIME", DEFAULT_STANDARD_START)),
            grace_minutes=int(getattr(settings, "GRACE_MINUTES", DEFAULT_GRACE_MINUTES)),
            late_threshold_minutes=int(getattr(settings, "LATE_THRESHOLD_MINUTES", DEFAULT_LATE_THRESHOLD_MINUTES)),
        )

    def minutes_after_start(self, check_in_time: datetime) -> int:
        """Negative for early arrivals."""
        return minutes_since_midnight(check_in_time) - minutes_since_midnight(self.standard_start)
