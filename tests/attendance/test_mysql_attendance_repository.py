from __future__ import annotations

from datetime import date, datetime

import mysql.connector
import pytest

from attendance_tracker.attendance.model import RecordFilters
from attendance_tracker.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from attendance_tracker.common.datetime_utils import DateRange
from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.core.exceptions import AlreadyCheckedIn

from conftest import FakeConnFactory, FakeConnection


def repo_with(**kwargs):
    conn = FakeConnection(**kwargs)
    return MySQLAttendanceRepository(FakeConnFactory(conn)), conn


def test_get_for_user_and_date_maps_row():
    repo, conn = repo_with(
        rows=[
            {
                "attendance_id": 5,
                "user_id": 1,
                "work_date": date(2024, 3, 12),
                "check_in_time": datetime(2024, 3, 12, 9, 0),
                "check_out_time": None,
                "status": "late",
                "total_hours": None,
                "note": "",
            }
        ]
    )

    rec = repo.get_for_user_and_date(1, date(2024, 3, 12))

    assert rec.status == AttendanceStatus.LATE
    assert rec.total_hours == 0.0
    assert conn.executed[0][1] == (1, date(2024, 3, 12))
    assert conn.committed and conn.closed


def test_create_checkin_returns_id():
    repo, conn = repo_with()
    new_id = repo.create_checkin(
        user_id=1, work_date=date(2024, 3, 12), check_in_time=datetime(2024, 3, 12, 9, 0), status=AttendanceStatus.PRESENT
    )
    assert new_id == 11
    assert conn.executed[0][1][3] == "present"


def test_duplicate_key_becomes_already_checked_in():
    error = mysql.connector.IntegrityError(msg="Duplicate entry", errno=1062)
    repo, conn = repo_with(error=error)

    with pytest.raises(AlreadyCheckedIn):
        repo.create_checkin(
            user_id=1, work_date=date(2024, 3, 12), check_in_time=datetime(2024, 3, 12, 9, 0), status=AttendanceStatus.PRESENT
        )
    assert conn.rolled_back


def test_other_integrity_errors_propagate():
    error = mysql.connector.IntegrityError(msg="Cannot add or update a child row", errno=1452)
    repo, _ = repo_with(error=error)

    with pytest.raises(mysql.connector.IntegrityError):
        repo.create_checkin(
            user_id=99, work_date=date(2024, 3, 12), check_in_time=datetime(2024, 3, 12, 9, 0), status=AttendanceStatus.PRESENT
        )


def test_update_checkout_is_conditional():
    repo, conn = repo_with(rowcount=0)
    ok = repo.update_checkout(attendance_id=5, check_out_time=datetime(2024, 3, 12, 17, 0), total_hours=8.0)

    assert ok is False
    assert "check_out_time IS NULL" in conn.executed[0][0]


def test_find_records_pushes_filters_and_paging():
    repo, conn = repo_with()
    repo.find_records(
        date_range=DateRange.single_day(date(2024, 3, 12)),
        filters=RecordFilters(status=AttendanceStatus.LATE, department="Sales"),
        limit=20,
        offset=40,
    )

    sql, params = conn.executed[0]
    assert "ar.status=%s" in sql and "u.department=%s" in sql and "LIMIT %s OFFSET %s" in sql
    assert params == (date(2024, 3, 12), date(2024, 3, 12), "late", "Sales", 20, 40)


def test_get_recent_for_user_binds_range_before_limit():
    repo, conn = repo_with()
    repo.get_recent_for_user(3, 7, date_range=DateRange(date(2024, 3, 6), date(2024, 3, 12)))

    sql, params = conn.executed[0]
    assert "user_id=%s AND work_date BETWEEN %s AND %s" in sql
    assert "ORDER BY work_date DESC LIMIT %s" in sql
    assert params == (3, date(2024, 3, 6), date(2024, 3, 12), 7)


def test_get_recent_for_user_without_range():
    repo, conn = repo_with()
    repo.get_recent_for_user(3, 100)

    sql, params = conn.executed[0]
    assert "BETWEEN" not in sql
    assert params == (3, 100)


def test_count_records_uses_same_filters_without_paging():
    repo, conn = repo_with(rows=[{"total": 4}])
    total = repo.count_records(
        date_range=DateRange.single_day(date(2024, 3, 12)),
        user_id=2,
        filters=RecordFilters(employee_id="EMP002"),
    )

    sql, params = conn.executed[0]
    assert total == 4
    assert sql.startswith("SELECT COUNT(*) AS total FROM attendance_records ar LEFT JOIN users u")
    assert "ar.user_id=%s" in sql and "u.employee_id=%s" in sql
    assert "LIMIT" not in sql
    assert params == (date(2024, 3, 12), date(2024, 3, 12), 2, "EMP002")


def test_count_records_empty_result_is_zero():
    repo, _ = repo_with(rows=[])
    assert repo.count_records() == 0


def test_record_checkin_only_fills_missing_checkin():
    repo, conn = repo_with(rowcount=1)
    ok = repo.record_checkin(attendance_id=5, check_in_time=datetime(2024, 3, 12, 9, 20), status=AttendanceStatus.LATE)

    sql, params = conn.executed[0]
    assert ok is True
    assert "WHERE attendance_id=%s AND check_in_time IS NULL" in sql
    assert params == (datetime(2024, 3, 12, 9, 20), "late", 5)


def test_record_checkin_reports_lost_race():
    repo, _ = repo_with(rowcount=0)
    ok = repo.record_checkin(attendance_id=5, check_in_time=datetime(2024, 3, 12, 9, 20), status=AttendanceStatus.LATE)
    assert ok is False
