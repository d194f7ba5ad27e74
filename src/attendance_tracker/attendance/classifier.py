from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from ..core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_LATE_THRESHOLD_MINUTES, DEFAULT_STANDARD_START
from ..core.enums import AttendanceStatus
from .factory import AttendanceStrategyFactory
from .policy import AttendancePolicy

_factory = AttendanceStrategyFactory()


def classify_with_policy(check_in_time: Optional[datetime], policy: AttendancePolicy) -> AttendanceStatus:
    strategy = _factory.for_checkin(check_in_time=check_in_time, policy=policy)
    return strategy.decide_checkin(check_in_time=check_in_time, policy=policy).status


def classify(
    check_in_time: Optional[datetime],
    standard_start: time = DEFAULT_STANDARD_START,
    grace_minutes: int = DEFAULT_GRACE_MINUTES,
    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES,
) -> AttendanceStatus:
    """Status for a check-in instant; ``None`` means no check-in (ABSENT)."""
    policy = AttendancePolicy(
        standard_start=standard_start,
        grace_minutes=grace_minutes,
        late_threshold_minutes=late_threshold_minutes,
    )
    return classify_with_policy(check_in_time, policy)
