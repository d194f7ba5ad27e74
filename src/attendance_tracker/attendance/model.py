from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, LifecycleState


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one person's attendance for one calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: float = 0.0
    note: Optional[str] = None

    @property
    def state(self) -> LifecycleState:
        if self.check_in_time is None:
            return LifecycleState.NOT_STARTED
        if self.check_out_time is None:
            return LifecycleState.CHECKED_IN
        return LifecycleState.COMPLETED


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for reports/exports: a record joined with its person.

    The person columns come from an outer join and may all be None when the
    person no longer exists.
    """

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: float = 0.0
    note: Optional[str] = None
    employee_id: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None


@dataclass(frozen=True)
class RecordFilters:
    """Optional filters pushed down to the persistence layer."""

    status: Optional[AttendanceStatus] = None
    employee_id: Optional[str] = None
    department: Optional[str] = None


@dataclass(frozen=True)
class TodayStatus:
    """A person's lifecycle state for one day, with the record if any."""

    state: LifecycleState
    record: Optional[AttendanceRecord] = None

    @property
    def check_in_time(self) -> Optional[datetime]:
        return self.record.check_in_time if self.record else None

    @property
    def check_out_time(self) -> Optional[datetime]:
        return self.record.check_out_time if self.record else None

    @property
    def total_hours(self) -> float:
        return self.record.total_hours if self.record else 0.0
