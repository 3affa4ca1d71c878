from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.attendance_tracker.attendance_tracker.students.model import Student


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def roster() -> list[Student]:
    return [
        Student("S01", "Amaan Shaik"),
        Student("S02", "Veronika Ahongshangbam"),
        Student("S03", "Diana Prince"),
    ]
