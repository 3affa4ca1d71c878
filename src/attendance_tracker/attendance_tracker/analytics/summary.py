from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import format_long_date
from ..common.numbers import percentage
from ..core.constants import DEFAULT_TOP_STUDENTS
from ..students.model import Student
from .cohort import top_regulars
from .series import RecordsInput, prepare_records

NO_DATA_MESSAGE = "No attendance data for today."
UNKNOWN_STUDENT = "Unknown Student"


def _numbered(names: Sequence[str]) -> str:
    return "\n".join(f"{i}. {name}" for i, name in enumerate(names, 1))


def render_summary(
    day: date,
    present_count: int,
    total_count: int,
    top_students: Sequence[str],
    present_students: Sequence[str],
) -> str:
    """Plain-text daily summary for sharing (clipboard / image caption)."""
    lines = [
        f"📅 {format_long_date(day)}",
        "🧾 Daily Attendance Summary",
        f"✅ Present: {present_count} / {total_count} ({percentage(present_count, total_count)}%)",
        "",
        "📈 Most Consistent Students:",
        _numbered(top_students),
        "",
        "🟢 Students Present:",
        _numbered(present_students),
    ]
    return "\n".join(lines).strip()


def build_daily_summary(
    records: RecordsInput,
    roster: Sequence[Student],
    day: date,
    *,
    top_count: int = DEFAULT_TOP_STUDENTS,
) -> str:
    prepared = prepare_records(records)
    record = next((r for r in prepared.records if r.record_date == day.isoformat()), None)
    if record is None:
        return NO_DATA_MESSAGE

    names = {s.student_id: s.name for s in roster}
    # Roster order first, then ids no longer on the roster.
    present = [s.name for s in roster if record.is_present(s.student_id)]
    present += [UNKNOWN_STUDENT for sid in sorted(record.present_ids) if sid not in names]
    top = [r.student.name for r in top_regulars(prepared, roster, top_count)]

    return render_summary(day, record.present_count, len(roster), top, present)
