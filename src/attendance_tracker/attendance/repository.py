from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import DateRange
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceReportRow, RecordFilters


class AttendanceRepository(Protocol):
    """Persistence contract for attendance records.

    Implementations must enforce uniqueness of (user_id, work_date) and raise
    ``AlreadyCheckedIn`` from ``create_checkin`` when it is violated.
    """

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(
        self,
        user_id: int,
        limit: int,
        *,
        date_range: Optional[DateRange] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def find_records(
        self,
        *,
        date_range: Optional[DateRange] = None,
        user_id: Optional[int] = None,
        filters: Optional[RecordFilters] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Sequence[AttendanceReportRow]:
        """Records joined with their person, newest day first."""

        raise NotImplementedError

    def count_records(
        self,
        *,
        date_range: Optional[DateRange] = None,
        user_id: Optional[int] = None,
        filters: Optional[RecordFilters] = None,
    ) -> int:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def record_checkin(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> bool:
        """Fill the check-in of an existing record that has none yet."""

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        total_hours: float,
    ) -> bool:
        """Set the check-out only if the record has none; False otherwise."""

        raise NotImplementedError
