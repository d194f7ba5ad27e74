from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence, Tuple

import mysql.connector

from ..common.datetime_utils import DateRange
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, AttendanceReportRow, RecordFilters
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_RECORD_COLUMNS = "attendance_id, user_id, work_date, check_in_time, check_out_time, status, total_hours, note"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=float(r.get("total_hours") or 0),
        note=r.get("note"),
    )


def _to_report_row(r: Dict[str, Any]) -> AttendanceReportRow:
    return AttendanceReportRow(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=float(r.get("total_hours") or 0),
        note=r.get("note"),
        employee_id=r.get("employee_id"),
        full_name=r.get("full_name"),
        email=r.get("email"),
        department=r.get("department"),
    )


def _where(
    date_range: Optional[DateRange],
    user_id: Optional[int],
    filters: Optional[RecordFilters],
) -> Tuple[str, Tuple[object, ...]]:
    clauses = ["1=1"]
    params: list[object] = []

    if date_range is not None:
        clauses.append("ar.work_date BETWEEN %s AND %s")
        params.extend([date_range.start, date_range.end])
    if user_id is not None:
        clauses.append("ar.user_id=%s")
        params.append(int(user_id))
    if filters is not None:
        if filters.status is not None:
            clauses.append("ar.status=%s")
            params.append(filters.status.value)
        if filters.employee_id is not None:
            clauses.append("u.employee_id=%s")
            params.append(filters.employee_id)
        if filters.department is not None:
            clauses.append("u.department=%s")
            params.append(filters.department)

    return " AND ".join(clauses), tuple(params)


class MySQLAttendanceRepository(AttendanceRepository):
    """MySQL-backed records.

    Relies on ``UNIQUE KEY (user_id, work_date)`` on ``attendance_records``.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s AND work_date=%s
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent_for_user(
        self,
        user_id: int,
        limit: int,
        *,
        date_range: Optional[DateRange] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [user_id]
        if date_range is not None:
            clauses.append("work_date BETWEEN %s AND %s")
            params.extend([date_range.start, date_range.end])
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE {" AND ".join(clauses)}
                ORDER BY work_date DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def find_records(
        self,
        *,
        date_range: Optional[DateRange] = None,
        user_id: Optional[int] = None,
        filters: Optional[RecordFilters] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Sequence[AttendanceReportRow]:
        where, params = _where(date_range, user_id, filters)
        paging = ""
        if limit is not None:
            paging = "LIMIT %s OFFSET %s"
            params = params + (int(limit), int(offset))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    ar.attendance_id, ar.user_id, ar.work_date, ar.check_in_time, ar.check_out_time,
                    ar.status, ar.total_hours, ar.note,
                    u.employee_id, u.full_name, u.email, u.department
                FROM attendance_records ar
                LEFT JOIN users u ON u.user_id = ar.user_id
                WHERE {where}
                ORDER BY ar.work_date DESC, ar.user_id ASC
                {paging}
                """,
                params,
            )
            return [_to_report_row(r) for r in fetchall(cur)]

    def count_records(
        self,
        *,
        date_range: Optional[DateRange] = None,
        user_id: Optional[int] = None,
        filters: Optional[RecordFilters] = None,
    ) -> int:
        where, params = _where(date_range, user_id, filters)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(*) AS total
                FROM attendance_records ar
                LEFT JOIN users u ON u.user_id = ar.user_id
                WHERE {where}
                """,
                params,
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(user_id, work_date, check_in_time, status, total_hours, note)
                    VALUES(%s,%s,%s,%s,0,%s)
                    """,
                    (user_id, work_date, check_in_time, status.value, note),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if not is_duplicate_key(exc):
                raise
            logger.warning("Duplicate check-in rejected by unique key user_id=%s work_date=%s", user_id, work_date)
            raise AlreadyCheckedIn() from exc

    def record_checkin(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, status=%s
                WHERE attendance_id=%s AND check_in_time IS NULL
                """,
                (check_in_time, status.value, int(attendance_id)),
            )
            return cur.rowcount > 0

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        total_hours: float,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, total_hours=%s
                WHERE attendance_id=%s AND check_in_time IS NOT NULL AND check_out_time IS NULL
                """,
                (check_out_time, total_hours, int(attendance_id)),
            )
            return cur.rowcount > 0
