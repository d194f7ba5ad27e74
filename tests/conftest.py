from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

import pytest

from attendance_tracker.attendance.model import AttendanceRecord, AttendanceReportRow
from attendance_tracker.attendance.service import AttendanceService
from attendance_tracker.core.enums import AttendanceStatus, Role
from attendance_tracker.core.exceptions import AlreadyCheckedIn
from attendance_tracker.reports.service import ReportService
from attendance_tracker.users.model import Person


@dataclass
class InMemoryUsers:
    users_by_id: dict[int, Person]

    def get_by_id(self, user_id: int) -> Optional[Person]:
        return self.users_by_id.get(user_id)

    def list_roster(self, role: Role, department: Optional[str] = None):
        people = [p for p in self.users_by_id.values() if p.role == role and p.is_active]
        if department is not None:
            people = [p for p in people if p.department == department]
        return sorted(people, key=lambda p: p.employee_id)

    def count_roster(self, role: Role, department: Optional[str] = None) -> int:
        return len(self.list_roster(role, department))


class InMemoryAttendance:
    """Keyed by (user_id, work_date) like the UNIQUE key in MySQL."""

    def __init__(self, users: Optional[InMemoryUsers] = None):
        self._users = users
        self._by_user_date: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self._lock = threading.Lock()

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self._by_user_date[(record.user_id, record.work_date)] = record
        self._id = max(self._id, record.attendance_id)
        return record

    def all(self):
        return list(self._by_user_date.values())

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def get_recent_for_user(self, user_id: int, limit: int, *, date_range=None):
        items = [r for r in self._by_user_date.values() if r.user_id == user_id]
        if date_range is not None:
            items = [r for r in items if date_range.contains(r.work_date)]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def _join(self, r: AttendanceRecord) -> AttendanceReportRow:
        person = self._users.get_by_id(r.user_id) if self._users else None
        return AttendanceReportRow(
            attendance_id=r.attendance_id,
            user_id=r.user_id,
            work_date=r.work_date,
            check_in_time=r.check_in_time,
            check_out_time=r.check_out_time,
            status=r.status,
            total_hours=r.total_hours,
            note=r.note,
            employee_id=person.employee_id if person else None,
            full_name=person.full_name if person else None,
            email=person.email if person else None,
            department=person.department if person else None,
        )

    def _select(self, date_range=None, user_id=None, filters=None):
        rows = [self._join(r) for r in self._by_user_date.values()]
        if date_range is not None:
            rows = [r for r in rows if date_range.contains(r.work_date)]
        if user_id is not None:
            rows = [r for r in rows if r.user_id == user_id]
        if filters is not None:
            if filters.status is not None:
                rows = [r for r in rows if r.status == filters.status]
            if filters.employee_id is not None:
                rows = [r for r in rows if r.employee_id == filters.employee_id]
            if filters.department is not None:
                rows = [r for r in rows if r.department == filters.department]
        rows.sort(key=lambda r: (-r.work_date.toordinal(), r.user_id))
        return rows

    def find_records(self, *, date_range=None, user_id=None, filters=None, limit=None, offset=0):
        rows = self._select(date_range, user_id, filters)
        if limit is not None:
            rows = rows[offset : offset + limit]
        return rows

    def count_records(self, *, date_range=None, user_id=None, filters=None) -> int:
        return len(self._select(date_range, user_id, filters))

    def create_checkin(self, *, user_id: int, work_date: date, check_in_time: datetime, status: AttendanceStatus, note=None) -> int:
        with self._lock:
            if (user_id, work_date) in self._by_user_date:
                raise AlreadyCheckedIn()
            self._id += 1
            self._by_user_date[(user_id, work_date)] = AttendanceRecord(
                attendance_id=self._id,
                user_id=user_id,
                work_date=work_date,
                check_in_time=check_in_time,
                check_out_time=None,
                status=status,
                note=note,
            )
            return self._id

    def _find_by_id(self, attendance_id: int):
        for k, v in self._by_user_date.items():
            if v.attendance_id == attendance_id:
                return k, v
        return None, None

    def record_checkin(self, *, attendance_id: int, check_in_time: datetime, status: AttendanceStatus) -> bool:
        with self._lock:
            key, rec = self._find_by_id(attendance_id)
            if rec is None or rec.check_in_time is not None:
                return False
            self._by_user_date[key] = replace(rec, check_in_time=check_in_time, status=status)
            return True

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime, total_hours: float) -> bool:
        with self._lock:
            key, rec = self._find_by_id(attendance_id)
            if rec is None or rec.check_in_time is None or rec.check_out_time is not None:
                return False
            self._by_user_date[key] = replace(rec, check_out_time=check_out_time, total_hours=total_hours)
            return True


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = 0
        self.rowcount = 0

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.error is not None:
            raise self._conn.error
        self.lastrowid = 11
        self.rowcount = self._conn.rowcount

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return self._conn.rows

    def close(self):
        pass


class FakeConnection:
    """Stands in for a mysql-connector connection; records executed SQL."""

    def __init__(self, rows=None, error=None, rowcount=1):
        self.rows = rows or []
        self.error = error
        self.rowcount = rowcount
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, conn: FakeConnection):
        self.conn = conn

    def connect(self):
        return self.conn


def make_person(user_id: int, department: Optional[str] = "Engineering", role: Role = Role.EMPLOYEE) -> Person:
    return Person(
        user_id=user_id,
        employee_id=f"EMP{user_id:03d}",
        full_name=f"Person {user_id}",
        email=f"person{user_id}@example.com",
        role=role,
        department=department,
    )


def make_record(
    attendance_id: int,
    user_id: int,
    check_in: Optional[datetime],
    check_out: Optional[datetime] = None,
    status: AttendanceStatus = AttendanceStatus.PRESENT,
    total_hours: float = 0.0,
    work_date: Optional[date] = None,
) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=attendance_id,
        user_id=user_id,
        work_date=work_date or check_in.date(),
        check_in_time=check_in,
        check_out_time=check_out,
        status=status,
        total_hours=total_hours,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 12, 9, 10, 0)


@pytest.fixture
def people():
    return [
        make_person(1, "Engineering"),
        make_person(2, "Engineering"),
        make_person(3, "Sales"),
        make_person(4, "HR", role=Role.MANAGER),
    ]


@pytest.fixture
def users_repo(people) -> InMemoryUsers:
    return InMemoryUsers({p.user_id: p for p in people})


@pytest.fixture
def attendance_repo(users_repo) -> InMemoryAttendance:
    return InMemoryAttendance(users_repo)


@pytest.fixture
def service(attendance_repo, users_repo) -> AttendanceService:
    return AttendanceService(attendance_repo, users_repo)


@pytest.fixture
def report_service(attendance_repo, users_repo) -> ReportService:
    return ReportService(attendance_repo, users_repo)
