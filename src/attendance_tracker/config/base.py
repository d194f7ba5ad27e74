import os

from ..core.constants import DEFAULT_DEPARTMENTS, DEFAULT_GRACE_MINUTES, DEFAULT_LATE_THRESHOLD_MINUTES


def env_departments(default=DEFAULT_DEPARTMENTS) -> tuple:
    raw = os.getenv("DEPARTMENTS")
    if not raw:
        return tuple(default)
    return tuple(d.strip() for d in raw.split(",") if d.strip())


def db_config(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "attendance_db"),
    }


# Attendance policy
STANDARD_CHECKIN_TIME = os.getenv("STANDARD_CHECKIN_TIME", "09:00")
GRACE_MINUTES = int(os.getenv("GRACE_MINUTES", str(DEFAULT_GRACE_MINUTES)))
LATE_THRESHOLD_MINUTES = int(os.getenv("LATE_THRESHOLD_MINUTES", str(DEFAULT_LATE_THRESHOLD_MINUTES)))
DEPARTMENTS = env_departments()
