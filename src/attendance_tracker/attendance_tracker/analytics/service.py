from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List

from ..attendance.repository import AttendanceRepository
from ..core.constants import DEFAULT_CALENDAR_MONTHS, DEFAULT_TOP_STUDENTS, DEFAULT_TREND_WINDOW
from ..core.exceptions import NotFoundError
from ..students.repository import StudentRepository
from .cohort import compute_advanced_stats, compute_cohort_stats
from .model import DashboardReport, StudentReport, TrendPoint
from .series import prepare_records
from .student_stats import compute_student_stats
from .summary import build_daily_summary
from .trend import calendar_heatmap, daily_trend

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Loads roster/attendance snapshots and runs the analytics functions on them."""

    def __init__(self, students: StudentRepository, attendance: AttendanceRepository):
        self._students = students
        self._attendance = attendance

    def _snapshot(self):
        roster = list(self._students.list_all())
        prepared = prepare_records(self._attendance.list_all())
        if prepared.skipped:
            logger.warning("%d attendance records skipped (invalid date)", prepared.skipped)
        return roster, prepared

    def build_dashboard(self, *, now: datetime, trend_window: int = DEFAULT_TREND_WINDOW) -> DashboardReport:
        roster, prepared = self._snapshot()
        return DashboardReport(
            stats=tuple(compute_cohort_stats(prepared, roster, now=now)),
            advanced=compute_advanced_stats(prepared, roster, now=now),
            trend=tuple(daily_trend(prepared, roster, trend_window)),
            skipped_records=prepared.skipped,
        )

    def build_student_report(
        self,
        student_id: str,
        *,
        now: datetime,
        months_back: int = DEFAULT_CALENDAR_MONTHS,
    ) -> StudentReport:
        roster, prepared = self._snapshot()
        student = next((s for s in roster if s.student_id == student_id), None)
        if student is None:
            raise NotFoundError(f"Student {student_id} not found")
        return StudentReport(
            student=student,
            stats=compute_student_stats(student_id, prepared, roster, now=now),
            calendar=tuple(calendar_heatmap(student_id, prepared, months_back, now=now)),
            skipped_records=prepared.skipped,
        )

    def trend(self, *, window_size: int = DEFAULT_TREND_WINDOW) -> List[TrendPoint]:
        roster, prepared = self._snapshot()
        return daily_trend(prepared, roster, window_size)

    def daily_summary(self, day: date, *, top_count: int = DEFAULT_TOP_STUDENTS) -> str:
        roster, prepared = self._snapshot()
        return build_daily_summary(prepared, roster, day, top_count=top_count)
