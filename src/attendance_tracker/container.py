from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.policy import AttendancePolicy
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_DEPARTMENTS
from .database.connection import DBConfig, DatabaseConnection
from .hours.calculator.standard_calculator import StandardHoursCalculator
from .reports.service import ReportService
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    attendance_repo: MySQLAttendanceRepository

    attendance_service: AttendanceService
    report_service: ReportService


def build_container(
    *,
    db_config: dict,
    policy: Optional[AttendancePolicy] = None,
    departments: Sequence[str] = DEFAULT_DEPARTMENTS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        policy=policy or AttendancePolicy(),
        strategy_factory=AttendanceStrategyFactory(),
        hours_calculator=StandardHoursCalculator(),
    )
    report_service = ReportService(attendance_repo, users_repo, departments=departments)

    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        report_service=report_service,
    )


def build_container_from_settings(settings: Any) -> Container:
    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        policy=AttendancePolicy.from_settings(settings),
        departments=getattr(settings, "DEPARTMENTS", DEFAULT_DEPARTMENTS),
    )
