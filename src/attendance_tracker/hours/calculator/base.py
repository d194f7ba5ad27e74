from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked_hours(self, check_in_time: Optional[datetime], check_out_time: Optional[datetime]) -> float:
        raise NotImplementedError
