from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

from ...core.exceptions import InvalidRange
from .base import HoursCalculator

_CENT = Decimal("0.01")
_SECONDS_PER_HOUR = Decimal(3600)


def round_hours(value: Union[float, int, Decimal]) -> float:
    """Round half-up to 2 decimals, the precision hours are shown with."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))


def sum_hours(values: Iterable[Union[float, int, Decimal]]) -> float:
    total = sum((Decimal(str(v or 0)) for v in values), Decimal(0))
    return round_hours(total)


def compute_hours(check_in_time: Optional[datetime], check_out_time: Optional[datetime]) -> float:
    """Hours between check-in and check-out; 0 when either is missing."""
    if check_in_time is None or check_out_time is None:
        return 0.0
    if check_out_time < check_in_time:
        raise InvalidRange()

    delta = check_out_time - check_in_time
    seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / Decimal(1_000_000)
    return round_hours(seconds / _SECONDS_PER_HOUR)


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: (out - in) in hours, no break deduction."""

    def worked_hours(self, check_in_time: Optional[datetime], check_out_time: Optional[datetime]) -> float:
        return compute_hours(check_in_time, check_out_time)
