"""Aggregation over already-materialized record collections.

Every function here is pure: callers fetch the (filtered, bounded) records
from the repository first, then summarise them. Empty input yields zero
counts, never an error.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from typing import Iterable, List, Sequence, Union

from ..attendance.model import AttendanceRecord, AttendanceReportRow
from ..common.datetime_utils import DateRange
from ..core.constants import WEEKDAY_LABELS
from ..core.enums import AttendanceStatus
from ..hours.calculator.standard_calculator import round_hours, sum_hours
from ..users.model import Person
from .model import DepartmentBreakdown, DepartmentPresence, GroupSummary, PersonSummary, TrendPoint

AnyRecord = Union[AttendanceRecord, AttendanceReportRow]


def _in_range(records: Iterable[AnyRecord], date_range: DateRange) -> List[AnyRecord]:
    return [r for r in records if date_range.contains(r.work_date)]


def _checked_in(records: Iterable[AnyRecord]) -> List[AnyRecord]:
    return [r for r in records if r.check_in_time is not None]


def person_summary(records: Iterable[AnyRecord], date_range: DateRange) -> PersonSummary:
    selected = _in_range(records, date_range)
    counts = Counter(r.status for r in selected)
    return PersonSummary(
        total_days=len(selected),
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        late=counts[AttendanceStatus.LATE],
        half_day=counts[AttendanceStatus.HALF_DAY],
        total_hours=sum_hours(r.total_hours for r in selected),
    )


def group_summary(records: Iterable[AnyRecord], roster: Sequence[Person], date_range: DateRange) -> GroupSummary:
    """Summary for a group of people (a department, a team, everyone).

    Only records that belong to someone on ``roster`` are counted.
    """

    member_ids = {p.user_id for p in roster}
    selected = [r for r in _in_range(records, date_range) if r.user_id in member_ids]
    counts = Counter(r.status for r in selected)
    total_hours = sum_hours(r.total_hours for r in selected)

    return GroupSummary(
        total_people=len(roster),
        total_present=counts[AttendanceStatus.PRESENT],
        total_absent=counts[AttendanceStatus.ABSENT],
        total_late=counts[AttendanceStatus.LATE],
        total_half_day=counts[AttendanceStatus.HALF_DAY],
        average_hours=round_hours(total_hours / max(1, len(selected))),
    )


def department_breakdown(rows: Iterable[AttendanceReportRow], departments: Sequence[str]) -> List[DepartmentBreakdown]:
    """Status counts per declared department, zeros included, in declared order."""
    per_dept: dict[str, Counter] = {dept: Counter() for dept in departments}
    for row in rows:
        if row.department is None or row.department not in per_dept:
            continue
        per_dept[row.department][row.status] += 1

    return [
        DepartmentBreakdown(
            department=dept,
            present=per_dept[dept][AttendanceStatus.PRESENT],
            absent=per_dept[dept][AttendanceStatus.ABSENT],
            late=per_dept[dept][AttendanceStatus.LATE],
        )
        for dept in departments
    ]


def department_presence(
    rows_for_day: Iterable[AttendanceReportRow],
    roster: Sequence[Person],
    departments: Sequence[str],
) -> List[DepartmentPresence]:
    member_ids = {p.user_id for p in roster}
    present_ids = {r.user_id for r in _checked_in(rows_for_day) if r.user_id in member_ids}

    out: List[DepartmentPresence] = []
    for dept in departments:
        people = [p for p in roster if p.department == dept]
        present = sum(1 for p in people if p.user_id in present_ids)
        out.append(DepartmentPresence(department=dept, total=len(people), present=present, absent=len(people) - present))
    return out


def daily_trend(records: Iterable[AnyRecord], num_days: int, end_day: Union[date, datetime]) -> List[TrendPoint]:
    """Check-in counts for the last ``num_days`` days up to ``end_day``, oldest first."""
    date_range = DateRange.last_days(num_days, end_day)
    per_day = Counter(r.work_date for r in _checked_in(_in_range(records, date_range)))
    return [
        TrendPoint(day=day, weekday_label=WEEKDAY_LABELS[day.weekday()], present_count=per_day[day])
        for day in date_range.days()
    ]


def roster_gap_absentees(roster: Sequence[Person], records_for_day: Iterable[AnyRecord]) -> List[Person]:
    """People on the roster with no check-in that day.

    This is the authoritative "who is absent" answer; it ignores ``status``.
    """

    checked_in_ids = {r.user_id for r in _checked_in(records_for_day)}
    return [p for p in roster if p.user_id not in checked_in_ids]


def late_arrivals(rows: Iterable[AttendanceReportRow]) -> List[AttendanceReportRow]:
    return [r for r in rows if r.status == AttendanceStatus.LATE]
