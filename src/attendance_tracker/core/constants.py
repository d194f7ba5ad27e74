"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_STANDARD_START = time(9, 0)
DEFAULT_GRACE_MINUTES = 15
DEFAULT_LATE_THRESHOLD_MINUTES = 120

DEFAULT_DEPARTMENTS = ("Engineering", "Marketing", "Sales", "HR", "Finance", "Operations")

DEFAULT_HISTORY_LIMIT = 100
DEFAULT_TREND_DAYS = 7
DEFAULT_PAGE_SIZE = 20

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

MYSQL_DUPLICATE_KEY = 1062

EXPORT_FIELDS = ("Employee ID", "Name", "Department", "Date", "Check In", "Check Out", "Status", "Total Hours")
