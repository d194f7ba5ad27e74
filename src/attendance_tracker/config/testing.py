from .base import DEPARTMENTS, GRACE_MINUTES, LATE_THRESHOLD_MINUTES, STANDARD_CHECKIN_TIME, db_config

DB_CONFIG = db_config()

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

__all__ = [
    "DB_CONFIG",
    "DEBUG",
    "TESTING",
    "LOG_LEVEL",
    "STANDARD_CHECKIN_TIME",
    "GRACE_MINUTES",
    "LATE_THRESHOLD_MINUTES",
    "DEPARTMENTS",
]
