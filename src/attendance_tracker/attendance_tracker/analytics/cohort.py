from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import parse_iso_date, sunday_index, utc_today
from ..common.numbers import percentage
from ..core.constants import (
    DEFAULT_INACTIVE_LIST_SIZE,
    DEFAULT_TOP_STUDENTS,
    LOW_ATTENDANCE_THRESHOLD,
    NOT_AVAILABLE,
    RECENT_WINDOW_DAYS,
    WEEKDAY_NAMES,
)
from ..core.enums import ChangeType, StatKind
from ..students.model import Student
from .model import AdvancedStats, CohortStat, PreparedRecords, RankedStudent
from .series import RecordsInput, prepare_records
from .student_stats import compute_student_stats


def absent_count(record: AttendanceRecord, roster_size: int) -> int:
    # Ids of deleted students still count as present, so clamp at zero.
    return max(roster_size - record.present_count, 0)


def records_between(records: Sequence[AttendanceRecord], start: date, end: date) -> List[AttendanceRecord]:
    lo, hi = start.isoformat(), end.isoformat()
    return [r for r in records if lo <= r.record_date <= hi]


def recent_window(today: date, weeks_back: int = 0):
    """Inclusive (start, end) of a 7-day window ending `weeks_back` weeks before today."""
    end = today - timedelta(days=RECENT_WINDOW_DAYS * weeks_back)
    return end - timedelta(days=RECENT_WINDOW_DAYS - 1), end


def _busiest_day(totals: Dict[int, int]) -> str:
    """Weekday with the largest total; ties go to the earliest day Sunday..Saturday."""
    if not totals:
        return NOT_AVAILABLE
    best = max(totals, key=lambda i: (totals[i], -i))
    return WEEKDAY_NAMES[best]


def overall_attendance(records: RecordsInput, roster: Sequence[Student]) -> int:
    """Present marks over possible marks, as a rounded percentage."""
    rows = prepare_records(records).records
    if not rows or not roster:
        return 0
    present = sum(r.present_count for r in rows)
    return percentage(present, len(rows) * len(roster))


def most_active_day(records: RecordsInput) -> str:
    totals: Dict[int, int] = {}
    for r in prepare_records(records).records:
        day = sunday_index(parse_iso_date(r.record_date))
        totals[day] = totals.get(day, 0) + r.present_count
    return _busiest_day(totals)


def most_common_dropout_day(records: RecordsInput, roster: Sequence[Student]) -> str:
    rows = prepare_records(records).records
    if not rows or not roster:
        return NOT_AVAILABLE
    totals: Dict[int, int] = {}
    for r in rows:
        day = sunday_index(parse_iso_date(r.record_date))
        totals[day] = totals.get(day, 0) + absent_count(r, len(roster))
    return _busiest_day(totals)


def top_regulars(records: RecordsInput, roster: Sequence[Student], count: int = DEFAULT_TOP_STUDENTS) -> List[RankedStudent]:
    """Students by total days attended, descending; roster order breaks ties."""
    rows = prepare_records(records).records
    ranked = [RankedStudent(student=s, score=sum(r.is_present(s.student_id) for r in rows)) for s in roster]
    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked[: max(count, 0)]


def low_attendance(
    records: RecordsInput,
    roster: Sequence[Student],
    *,
    now: datetime,
    threshold: float = LOW_ATTENDANCE_THRESHOLD,
) -> List[RankedStudent]:
    """Students whose consistency score is below `threshold`, lowest first."""
    prepared = prepare_records(records)
    if not prepared.records:
        return []
    ranked = []
    for s in roster:
        score = compute_student_stats(s.student_id, prepared, now=now).consistency_score
        if score < threshold:
            ranked.append(RankedStudent(student=s, score=score))
    ranked.sort(key=lambda r: r.score)
    return ranked


def longest_inactive_streaks(
    records: RecordsInput,
    roster: Sequence[Student],
    *,
    now: datetime,
    count: int = DEFAULT_INACTIVE_LIST_SIZE,
) -> List[RankedStudent]:
    prepared = prepare_records(records)
    if not prepared.records:
        return []
    ranked = [
        RankedStudent(
            student=s,
            score=compute_student_stats(s.student_id, prepared, now=now).longest_inactive_streak,
        )
        for s in roster
    ]
    ranked.sort(key=lambda r: r.score, reverse=True)
    return ranked[: max(count, 0)]


def student_of_the_week(records: RecordsInput, roster: Sequence[Student], *, now: datetime) -> Optional[RankedStudent]:
    """Best (days present + current streak) over the last 7 days.

    The streak is computed on the 7-day window alone. Returns None when no
    record falls in the window.
    """
    rows = prepare_records(records).records
    start, end = recent_window(utc_today(now))
    window = PreparedRecords(records=tuple(records_between(rows, start, end)))
    if not window.records or not roster:
        return None

    best: Optional[RankedStudent] = None
    for s in roster:
        attended = sum(r.is_present(s.student_id) for r in window.records)
        streak = compute_student_stats(s.student_id, window, now=now).current_streak
        candidate = RankedStudent(student=s, score=attended + streak)
        if best is None or candidate.score > best.score:
            best = candidate
    return best


def compute_cohort_stats(records: RecordsInput, roster: Sequence[Student], *, now: datetime) -> List[CohortStat]:
    """Dashboard headline metrics for the whole class."""
    prepared = prepare_records(records)
    rows = prepared.records
    today = utc_today(now)

    todays = next((r for r in rows if r.record_date == today.isoformat()), None)
    todays_value = f"{todays.present_count} / {len(roster)}" if todays else "Not Taken"

    this_week = records_between(rows, *recent_window(today))
    last_week = records_between(rows, *recent_window(today, weeks_back=1))
    weekly = overall_attendance(this_week, roster)
    change = weekly - overall_attendance(last_week, roster)
    engagement = weekly if this_week else 0

    longest_class_streak = max(
        (compute_student_stats(s.student_id, prepared, now=now).longest_streak for s in roster),
        default=0,
    )

    return [
        CohortStat(name="Today's Attendance", value=todays_value, kind=StatKind.PRESENCE),
        CohortStat(name="Overall Attendance %", value=overall_attendance(prepared, roster), kind=StatKind.CALENDAR),
        CohortStat(
            name="Class Engagement (7d)",
            value=engagement,
            kind=StatKind.ENGAGEMENT,
            change=change,
            change_type=ChangeType.INCREASE if change >= 0 else ChangeType.DECREASE,
        ),
        CohortStat(name="Most Active Day", value=most_active_day(prepared), kind=StatKind.ACTIVITY),
        CohortStat(name="Longest Class Streak", value=longest_class_streak, kind=StatKind.AWARD),
        CohortStat(name="Most Common Dropout Day", value=most_common_dropout_day(prepared, roster), kind=StatKind.ALERT),
    ]


def compute_advanced_stats(
    records: RecordsInput,
    roster: Sequence[Student],
    *,
    now: datetime,
    top_count: int = DEFAULT_TOP_STUDENTS,
) -> AdvancedStats:
    prepared = prepare_records(records)
    return AdvancedStats(
        longest_inactive_streaks=tuple(longest_inactive_streaks(prepared, roster, now=now)),
        most_common_dropout_day=most_common_dropout_day(prepared, roster),
        student_of_the_week=student_of_the_week(prepared, roster, now=now),
        top_regulars=tuple(top_regulars(prepared, roster, top_count)),
        low_attendance=tuple(low_attendance(prepared, roster, now=now)),
    )
