from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence

from ..attendance.model import AttendanceReportRow, RecordFilters, TodayStatus
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DateRange, now_local
from ..common.validators import require_positive, require_year_month
from ..core.constants import DEFAULT_DEPARTMENTS, DEFAULT_PAGE_SIZE, DEFAULT_TREND_DAYS, EXPORT_FIELDS
from ..core.enums import AttendanceStatus, LifecycleState, Role
from ..core.exceptions import InvalidArgument
from ..users.model import Person
from ..users.repository import UserRepository
from .aggregation import (
    daily_trend,
    department_breakdown,
    department_presence,
    group_summary,
    late_arrivals,
    person_summary,
    roster_gap_absentees,
)
from .model import AttendancePage, EmployeeDashboard, ManagerDashboard, TeamSummary, TodayOverview

logger = logging.getLogger(__name__)


class ReportService:
    """Manager and employee read views built on the aggregation functions.

    Filtering happens in the repository; aggregation works on what it returns.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        departments: Sequence[str] = DEFAULT_DEPARTMENTS,
    ):
        self._attendance = attendance
        self._users = users
        self._departments = tuple(departments)

    @property
    def departments(self) -> Sequence[str]:
        return self._departments

    def _require_department(self, department: Optional[str]) -> None:
        if department is not None and department not in self._departments:
            raise InvalidArgument(f"Unknown department: {department}")

    def list_employees(self, department: Optional[str] = None) -> Sequence[Person]:
        self._require_department(department)
        return self._users.list_roster(Role.EMPLOYEE, department)

    def list_attendance(
        self,
        *,
        day: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
        employee_id: Optional[str] = None,
        department: Optional[str] = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> AttendancePage:
        page = require_positive(page, "page")
        limit = require_positive(limit, "limit")
        self._require_department(department)

        date_range = DateRange.single_day(day) if day else None
        filters = RecordFilters(status=status, employee_id=employee_id, department=department)
        items = self._attendance.find_records(
            date_range=date_range,
            filters=filters,
            limit=limit,
            offset=(page - 1) * limit,
        )
        total = self._attendance.count_records(date_range=date_range, filters=filters)
        return AttendancePage(items=list(items), total=total, page=page, limit=limit)

    def employee_attendance(
        self,
        user_id: int,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        require_year_month(year, month)
        date_range = DateRange.for_month(year, month) if year is not None else None
        return self._attendance.find_records(date_range=date_range, user_id=user_id)

    def team_summary(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        department: Optional[str] = None,
        today: Optional[date] = None,
    ) -> TeamSummary:
        self._require_department(department)
        today = today or now_local().date()
        year = int(year) if year is not None else today.year
        month = int(month) if month is not None else today.month
        date_range = DateRange.for_month(year, month)

        roster = self._users.list_roster(Role.EMPLOYEE, department)
        rows = self._attendance.find_records(date_range=date_range, filters=RecordFilters(department=department))

        return TeamSummary(
            year=year,
            month=month,
            department=department,
            summary=group_summary(rows, roster, date_range),
            departments=department_breakdown(rows, self._departments),
        )

    def today_overview(self, today: Optional[date] = None) -> TodayOverview:
        today = today or now_local().date()
        roster = self._users.list_roster(Role.EMPLOYEE)
        rows = self._attendance.find_records(date_range=DateRange.single_day(today))

        return TodayOverview(
            day=today,
            total_employees=len(roster),
            present=[r for r in rows if r.check_in_time is not None],
            absent=roster_gap_absentees(roster, rows),
            late=late_arrivals(rows),
        )

    def manager_dashboard(self, today: Optional[date] = None, *, trend_days: int = DEFAULT_TREND_DAYS) -> ManagerDashboard:
        today = today or now_local().date()
        trend_range = DateRange.last_days(trend_days, today)

        roster = self._users.list_roster(Role.EMPLOYEE)
        rows = self._attendance.find_records(date_range=trend_range)
        today_rows = [r for r in rows if r.work_date == today]

        overview = TodayOverview(
            day=today,
            total_employees=len(roster),
            present=[r for r in today_rows if r.check_in_time is not None],
            absent=roster_gap_absentees(roster, today_rows),
            late=late_arrivals(today_rows),
        )
        return ManagerDashboard(
            today=overview,
            weekly_trend=daily_trend(rows, trend_days, today),
            department_stats=department_presence(today_rows, roster, self._departments),
        )

    def employee_dashboard(self, user_id: int, today: Optional[date] = None) -> EmployeeDashboard:
        today = today or now_local().date()
        month_range = DateRange.for_month(today.year, today.month)
        recent_range = DateRange.last_days(DEFAULT_TREND_DAYS, today)

        today_record = self._attendance.get_for_user_and_date(user_id, today)
        month_records = self._attendance.get_recent_for_user(user_id, month_range.end.day, date_range=month_range)
        recent = self._attendance.get_recent_for_user(user_id, DEFAULT_TREND_DAYS, date_range=recent_range)

        return EmployeeDashboard(
            today=TodayStatus(
                state=today_record.state if today_record else LifecycleState.NOT_STARTED,
                record=today_record,
            ),
            this_month=person_summary(month_records, month_range),
            recent=list(recent),
        )

    def build_export_rows(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[str] = None,
        department: Optional[str] = None,
    ) -> List[dict]:
        """Plain records for an exporter; values stay raw (no formatting)."""
        if (start is None) != (end is None):
            raise InvalidArgument("start and end must be provided together")
        self._require_department(department)

        date_range = DateRange(start=start, end=end) if start is not None else None
        rows = self._attendance.find_records(
            date_range=date_range,
            filters=RecordFilters(employee_id=employee_id, department=department),
        )
        logger.info("Export prepared rows=%d range=%s..%s", len(rows), start, end)
        return [self._to_export(r) for r in rows]

    @staticmethod
    def _to_export(r: AttendanceReportRow) -> dict:
        values = (
            r.employee_id,
            r.full_name,
            r.department,
            r.work_date,
            r.check_in_time,
            r.check_out_time,
            r.status.value,
            r.total_hours or 0.0,
        )
        return dict(zip(EXPORT_FIELDS, values))
