from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import DateRange, now_local
from ..common.validators import require_positive, require_year_month
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import LifecycleState
from ..core.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, InvalidArgument, NotCheckedIn
from ..hours.calculator.base import HoursCalculator
from ..hours.calculator.standard_calculator import StandardHoursCalculator
from ..reports.aggregation import person_summary
from ..reports.model import PersonSummary
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, TodayStatus
from .policy import AttendancePolicy
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: check in / check out, one record per person per day.

    States go NOT_STARTED -> CHECKED_IN -> COMPLETED and never back.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        policy: Optional[AttendancePolicy] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        hours_calculator: Optional[HoursCalculator] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._policy = policy or AttendancePolicy()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._hours = hours_calculator or StandardHoursCalculator()

    @property
    def policy(self) -> AttendancePolicy:
        return self._policy

    def check_in(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        if not self._users.get_by_id(user_id):
            raise InvalidArgument(f"Unknown person: {user_id}")

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.check_in_time is not None:
            logger.warning("Check-in rejected, already checked in user_id=%s day=%s", user_id, today)
            raise AlreadyCheckedIn()

        strategy = self._factory.for_checkin(check_in_time=now, policy=self._policy)
        decision = strategy.decide_checkin(check_in_time=now, policy=self._policy)

        if existing:
            if not self._attendance.record_checkin(
                attendance_id=existing.attendance_id, check_in_time=now, status=decision.status
            ):
                raise AlreadyCheckedIn()
            attendance_id = existing.attendance_id
            note = existing.note
        else:
            attendance_id = self._attendance.create_checkin(
                user_id=user_id,
                work_date=today,
                check_in_time=now,
                status=decision.status,
            )
            note = None

        logger.info("Checked in user_id=%s at %s status=%s", user_id, now.isoformat(), decision.status.value)
        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=today,
            check_in_time=now,
            check_out_time=None,
            status=decision.status,
            note=note,
        )

    def check_out(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in_time is None:
            logger.warning("Check-out rejected, not checked in user_id=%s day=%s", user_id, today)
            raise NotCheckedIn()
        if record.check_out_time is not None:
            logger.warning("Check-out rejected, already checked out user_id=%s day=%s", user_id, today)
            raise AlreadyCheckedOut()

        # Raises InvalidRange when the clock went backwards.
        total_hours = self._hours.worked_hours(record.check_in_time, now)

        if not self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            total_hours=total_hours,
        ):
            raise AlreadyCheckedOut()

        logger.info("Checked out user_id=%s at %s total_hours=%.2f", user_id, now.isoformat(), total_hours)
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            user_id=record.user_id,
            work_date=record.work_date,
            check_in_time=record.check_in_time,
            check_out_time=now,
            status=record.status,
            total_hours=total_hours,
            note=record.note,
        )

    def get_state(self, user_id: int, day: date) -> LifecycleState:
        record = self._attendance.get_for_user_and_date(user_id, day)
        return record.state if record else LifecycleState.NOT_STARTED

    def get_today_status(self, user_id: int, today: Optional[date] = None) -> TodayStatus:
        today = today or now_local().date()
        record = self._attendance.get_for_user_and_date(user_id, today)
        return TodayStatus(state=record.state if record else LifecycleState.NOT_STARTED, record=record)

    def get_history(
        self,
        user_id: int,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> Sequence[AttendanceRecord]:
        """Newest first; restricted to one month when year/month are given."""
        require_year_month(year, month)
        limit = require_positive(limit, "limit")
        date_range = DateRange.for_month(year, month) if year is not None else None
        return self._attendance.get_recent_for_user(user_id, limit, date_range=date_range)

    def get_my_summary(
        self,
        user_id: int,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
        today: Optional[date] = None,
    ) -> PersonSummary:
        """Monthly summary, defaulting to the current month."""
        today = today or now_local().date()
        year = int(year) if year is not None else today.year
        month = int(month) if month is not None else today.month
        date_range = DateRange.for_month(year, month)

        records = self._attendance.get_recent_for_user(user_id, date_range.end.day, date_range=date_range)
        return person_summary(records, date_range)
