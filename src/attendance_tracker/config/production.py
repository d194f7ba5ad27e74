import os

from .base import DEPARTMENTS, GRACE_MINUTES, LATE_THRESHOLD_MINUTES, STANDARD_CHECKIN_TIME, db_config

DB_CONFIG = db_config()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

__all__ = [
    "DB_CONFIG",
    "DEBUG",
    "LOG_LEVEL",
    "STANDARD_CHECKIN_TIME",
    "GRACE_MINUTES",
    "LATE_THRESHOLD_MINUTES",
    "DEPARTMENTS",
]
