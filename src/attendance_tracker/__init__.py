"""Attendance Tracker package.

Organized by feature modules (attendance, hours, reports, users) with
repository protocols at the persistence seam and pure rules in between.
"""
