from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import InvalidArgument


def require_whole_number(value: Any, field_name: str) -> int:
    """Coerce to int, rejecting fractions and non-numeric input."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{field_name} must be a whole number, got {value!r}") from None
    if not isinstance(value, str) and number != value:
        raise InvalidArgument(f"{field_name} must be a whole number, got {value!r}")
    return number


def require_positive(value: int, field_name: str) -> int:
    if value is None or require_whole_number(value, field_name) < 1:
        raise InvalidArgument(f"{field_name} must be at least 1")
    return int(value)


def require_year_month(year: Optional[int], month: Optional[int]) -> None:
    """Year and month must be given together, month 1-12."""
    if (year is None) != (month is None):
        raise InvalidArgument("year and month must be provided together")
    if month is not None and not 1 <= require_whole_number(month, "month") <= 12:
        raise InvalidArgument(f"Month must be between 1 and 12, got {month}")
