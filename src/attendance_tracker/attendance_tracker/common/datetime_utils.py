from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

from ..core.constants import WEEKDAY_NAMES
from ..core.exceptions import InvalidDateFormat

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date.

    Only the zero-padded form is accepted so that string order stays
    chronological order.
    """
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise InvalidDateFormat(value)
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise InvalidDateFormat(value) from exc


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so controllers have one place to read the clock; the
    analytics functions always receive `now` as an argument.
    """
    return datetime.now(timezone.utc)


def utc_today(now: datetime) -> date:
    """Calendar date of `now` in UTC. Naive values are taken as UTC already."""
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(timezone.utc).date()


def sunday_index(day: date) -> int:
    """Weekday index with Sunday=0 .. Saturday=6."""
    return (day.weekday() + 1) % 7


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[sunday_index(day)]


def days_between(start: date, end: date):
    """Yield every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def months_before(day: date, months: int) -> date:
    """First day of the month `months` months before the month of `day`."""
    index = day.year * 12 + (day.month - 1) - months
    return date(index // 12, index % 12 + 1, 1)


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def format_long_date(day: date) -> str:
    """e.g. 'Monday, 1st January 2024'."""
    return f"{weekday_name(day)}, {ordinal(day.day)} {day.strftime('%B')} {day.year}"
