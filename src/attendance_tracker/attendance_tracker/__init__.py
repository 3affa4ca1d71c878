"""Attendance Tracker package.

Feature modules (students, attendance, analytics) with thin Flask controllers
over service/repository layers. The analytics package is a set of pure
functions over roster and attendance snapshots.
"""
