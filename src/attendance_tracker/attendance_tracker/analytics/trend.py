from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Sequence

from ..common.datetime_utils import days_between, months_before, sunday_index, utc_today
from ..core.constants import DEFAULT_CALENDAR_MONTHS, DEFAULT_TREND_WINDOW, MAX_CALENDAR_MONTHS
from ..core.exceptions import ValidationError
from ..core.enums import DayStatus
from ..students.model import Student
from .cohort import absent_count
from .model import CalendarDay, TrendPoint
from .series import RecordsInput, prepare_records


def daily_trend(records: RecordsInput, roster: Sequence[Student], window_size: int = DEFAULT_TREND_WINDOW) -> List[TrendPoint]:
    """Present/absent counts for the last `window_size` recorded days.

    Dates without a record are not filled in.
    """
    if window_size <= 0:
        return []
    rows = prepare_records(records).records[-window_size:]
    return [
        TrendPoint(date=r.record_date, present_count=r.present_count, absent_count=absent_count(r, len(roster)))
        for r in rows
    ]


def calendar_heatmap(
    student_id: str,
    records: RecordsInput,
    months_back: int = DEFAULT_CALENDAR_MONTHS,
    *,
    now: datetime,
) -> List[CalendarDay]:
    """One cell per day over whole Sunday-to-Saturday weeks.

    The window starts at the week containing the first day of the month
    `months_back` months ago and ends on the Saturday of the current week.
    All dates are UTC calendar dates.
    """
    if months_back > MAX_CALENDAR_MONTHS:
        raise ValidationError(f"Calendar window is limited to {MAX_CALENDAR_MONTHS} months")
    by_date = {r.record_date: r for r in prepare_records(records).records}
    today = utc_today(now)
    anchor = months_before(today, max(months_back, 0))
    start = anchor - timedelta(days=sunday_index(anchor))
    end = today + timedelta(days=6 - sunday_index(today))

    days = []
    for day in days_between(start, end):
        key = day.isoformat()
        record = by_date.get(key)
        if day < anchor and day.month != anchor.month:
            status = DayStatus.EMPTY
        elif day > today:
            status = DayStatus.FUTURE
        elif record is not None:
            status = DayStatus.PRESENT if record.is_present(student_id) else DayStatus.ABSENT
        else:
            status = DayStatus.NO_RECORD
        days.append(CalendarDay(date=key, status=status))
    return days
