from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterator, Tuple, Union

from ..core.exceptions import InvalidArgument
from .validators import require_whole_number

END_OF_DAY = time(23, 59, 59, 999000)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise InvalidArgument(f"Invalid date: {value!r}") from None


def parse_time_of_day(value: Union[str, time]) -> time:
    """Parse an ``HH:MM`` string (as used in settings) into a time."""
    if isinstance(value, time):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%H:%M").time()
    except ValueError:
        raise InvalidArgument(f"Invalid time of day: {value!r}") from None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def day_bounds(instant: Union[date, datetime]) -> Tuple[datetime, datetime]:
    """Start (local midnight) and end (23:59:59.999) of the instant's calendar day."""
    day = _as_date(instant)
    return datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY)


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """First instant and last millisecond of a 1-indexed month."""
    month = require_whole_number(month, "month")
    year = require_whole_number(year, "year")
    if not 1 <= month <= 12:
        raise InvalidArgument(f"Month must be between 1 and 12, got {month}")
    if not 1 <= year <= 9999:
        raise InvalidArgument(f"Invalid year: {year}")

    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime.combine(date(year, month, last_day), END_OF_DAY)
    return start, end


def is_weekend(day: Union[date, datetime]) -> bool:
    return _as_date(day).weekday() >= 5


def minutes_since_midnight(value: Union[datetime, time]) -> int:
    # Seconds are dropped: 09:15:59 still counts as minute 555.
    return value.hour * 60 + value.minute


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidArgument(f"Range end {self.end} is before start {self.start}")

    @classmethod
    def for_month(cls, year: int, month: int) -> "DateRange":
        start, end = month_bounds(year, month)
        return cls(start=start.date(), end=end.date())

    @classmethod
    def single_day(cls, day: Union[date, datetime]) -> "DateRange":
        day = _as_date(day)
        return cls(start=day, end=day)

    @classmethod
    def last_days(cls, num_days: int, end_day: Union[date, datetime]) -> "DateRange":
        """``num_days`` days ending at (and including) ``end_day``."""
        if int(num_days) < 1:
            raise InvalidArgument("num_days must be at least 1")
        end = _as_date(end_day)
        return cls(start=end - timedelta(days=int(num_days) - 1), end=end)

    def contains(self, day: Union[date, datetime]) -> bool:
        return self.start <= _as_date(day) <= self.end

    def days(self) -> Iterator[date]:
        return iter_days(self.start, self.end)
