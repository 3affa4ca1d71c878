from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from ..common.datetime_utils import days_between, parse_iso_date, sunday_index, utc_today
from ..common.numbers import round_half_up
from ..core.constants import CONSISTENCY_SCALE, NOT_AVAILABLE, WEEKDAY_NAMES
from ..students.model import Student
from .model import StudentStat
from .series import RecordsInput, prepare_records

# Gap in days between the latest record and today that still keeps a streak alive.
CURRENT_STREAK_TOLERANCE_DAYS = 1


def longest_run(flags: Iterable[bool]) -> int:
    """Length of the longest run of True values."""
    best = run = 0
    for flag in flags:
        run = run + 1 if flag else 0
        best = max(best, run)
    return best


def trailing_run(flags: Sequence[bool]) -> int:
    """Length of the run of True values ending at the last element."""
    run = 0
    for flag in reversed(flags):
        if not flag:
            break
        run += 1
    return run


def pick_weekday(counts: Sequence[int]) -> str:
    """Weekday with the highest count; ties go to the earliest day Sunday..Saturday."""
    best = max(range(len(WEEKDAY_NAMES)), key=lambda i: (counts[i], -i))
    return WEEKDAY_NAMES[best]


def empty_student_stat(student_id: str) -> StudentStat:
    return StudentStat(
        student_id=student_id,
        total_attended=0,
        current_streak=0,
        longest_streak=0,
        longest_inactive_streak=0,
        favorite_day=NOT_AVAILABLE,
        consistency_score=0,
    )


def compute_student_stats(
    student_id: str,
    records: RecordsInput,
    roster: Sequence[Student] = (),
    *,
    now: datetime,
) -> StudentStat:
    """Per-student streaks, favourite day and consistency score.

    Presence is only evaluated on days that have a record. The current streak
    counts present record-days backwards from the latest record and is reset
    to 0 unless that record is dated today or yesterday (UTC). The longest
    inactive streak walks every calendar day from the first record to today,
    so days without a record count as inactive.

    When a roster is given and does not contain `student_id`, neutral values
    are returned.
    """
    prepared = prepare_records(records)
    rows = prepared.records
    if not rows:
        return empty_student_stat(student_id)
    if roster and all(s.student_id != student_id for s in roster):
        return empty_student_stat(student_id)

    today = utc_today(now)
    flags = [r.is_present(student_id) for r in rows]
    total_attended = sum(flags)

    current_streak = trailing_run(flags)
    last_day = parse_iso_date(rows[-1].record_date)
    if not 0 <= (today - last_day).days <= CURRENT_STREAK_TOLERANCE_DAYS:
        current_streak = 0

    present_days = {r.record_date for r in rows if r.is_present(student_id)}
    first_day = parse_iso_date(rows[0].record_date)
    inactive_flags = (
        d.isoformat() not in present_days for d in days_between(first_day, max(today, last_day))
    )

    day_counts = [0] * len(WEEKDAY_NAMES)
    for record_date in present_days:
        day_counts[sunday_index(parse_iso_date(record_date))] += 1
    favorite_day = pick_weekday(day_counts) if total_attended else NOT_AVAILABLE

    consistency_score = round_half_up(total_attended / len(rows) * CONSISTENCY_SCALE, 1)

    return StudentStat(
        student_id=student_id,
        total_attended=total_attended,
        current_streak=current_streak,
        longest_streak=longest_run(flags),
        longest_inactive_streak=longest_run(inactive_flags),
        favorite_day=favorite_day,
        consistency_score=consistency_score,
    )
