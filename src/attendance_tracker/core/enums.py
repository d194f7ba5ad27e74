from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles a person can hold on the roster."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class AttendanceStatus(str, Enum):
    """Attendance status as stored on a record."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"


class LifecycleState(str, Enum):
    """Where a (person, day) pair is in the check-in/check-out flow."""

    NOT_STARTED = "not-started"
    CHECKED_IN = "checked-in"
    COMPLETED = "completed"
