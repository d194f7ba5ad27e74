"""Example: using the service layer directly.

Needs a reachable MySQL database configured through the DB_* variables (or a
.env file) with database/schema.sql applied.
"""

from datetime import date

from attendance_tracker.main import create_container


def main():
    container = create_container()

    today = date.today()
    print(container.attendance_service.get_today_status(user_id=1, today=today))
    print(container.report_service.team_summary(year=today.year, month=today.month))


if __name__ == "__main__":
    main()
