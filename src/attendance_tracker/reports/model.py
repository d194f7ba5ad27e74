from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from ..attendance.model import AttendanceRecord, AttendanceReportRow, TodayStatus
from ..users.model import Person


@dataclass(frozen=True)
class PersonSummary:
    total_days: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    half_day: int = 0
    total_hours: float = 0.0


@dataclass(frozen=True)
class GroupSummary:
    total_people: int = 0
    total_present: int = 0
    total_absent: int = 0
    total_late: int = 0
    total_half_day: int = 0
    average_hours: float = 0.0


@dataclass(frozen=True)
class DepartmentBreakdown:
    department: str
    present: int = 0
    absent: int = 0
    late: int = 0


@dataclass(frozen=True)
class DepartmentPresence:
    """Head count vs. check-ins for one department on one day."""

    department: str
    total: int = 0
    present: int = 0
    absent: int = 0


@dataclass(frozen=True)
class TrendPoint:
    day: date
    weekday_label: str
    present_count: int = 0


@dataclass(frozen=True)
class TeamSummary:
    year: int
    month: int
    department: Optional[str]
    summary: GroupSummary
    departments: List[DepartmentBreakdown] = field(default_factory=list)


@dataclass(frozen=True)
class TodayOverview:
    day: date
    total_employees: int
    present: List[AttendanceReportRow] = field(default_factory=list)
    absent: List[Person] = field(default_factory=list)
    late: List[AttendanceReportRow] = field(default_factory=list)

    @property
    def present_count(self) -> int:
        return len(self.present)

    @property
    def absent_count(self) -> int:
        return len(self.absent)

    @property
    def late_count(self) -> int:
        return len(self.late)


@dataclass(frozen=True)
class ManagerDashboard:
    today: TodayOverview
    weekly_trend: List[TrendPoint] = field(default_factory=list)
    department_stats: List[DepartmentPresence] = field(default_factory=list)


@dataclass(frozen=True)
class EmployeeDashboard:
    today: TodayStatus
    this_month: PersonSummary
    recent: List[AttendanceRecord] = field(default_factory=list)


@dataclass(frozen=True)
class AttendancePage:
    items: List[AttendanceReportRow]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0
