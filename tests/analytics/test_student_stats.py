from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.attendance_tracker.attendance_tracker.analytics.student_stats import compute_student_stats
from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.students.model import Student


def _utc(year, month, day, hour=12):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def _pattern_records():
    # 2024-01-01 (Mon) .. 2024-01-05 (Fri): P, P, A, P, P
    return [
        AttendanceRecord.of("2024-01-04", ["X"]),
        AttendanceRecord.of("2024-01-01", ["X"]),
        AttendanceRecord.of("2024-01-03", []),
        AttendanceRecord.of("2024-01-05", ["X"]),
        AttendanceRecord.of("2024-01-02", ["X"]),
    ]


def test_streaks_for_present_present_absent_present_present():
    stat = compute_student_stats("X", _pattern_records(), now=_utc(2024, 1, 5))

    assert stat.total_attended == 4
    assert stat.longest_streak == 2
    assert stat.current_streak == 2
    assert stat.longest_inactive_streak == 1
    assert stat.consistency_score == 8.0


def test_current_streak_survives_one_day_gap_only():
    # Documented choice: the latest record may be dated today or yesterday (UTC).
    assert compute_student_stats("X", _pattern_records(), now=_utc(2024, 1, 6)).current_streak == 2

    stale = compute_student_stats("X", _pattern_records(), now=_utc(2024, 1, 7))
    assert stale.current_streak == 0
    assert stale.longest_streak == 2


def test_today_is_taken_in_utc():
    # 20:00 UTC on Jan 5 even though it is already Jan 6 at +05:00.
    now = datetime(2024, 1, 6, 1, 0, tzinfo=timezone(timedelta(hours=5)))

    assert compute_student_stats("X", _pattern_records(), now=now).current_streak == 2


def test_scenario_second_student_missing_latest_day():
    records = [
        AttendanceRecord.of("2024-01-01", ["S01", "S02"]),
        AttendanceRecord.of("2024-01-02", ["S01"]),
    ]
    now = _utc(2024, 1, 2)

    s02 = compute_student_stats("S02", records, now=now)
    s01 = compute_student_stats("S01", records, now=now)

    assert s02.current_streak == 0
    assert s02.longest_streak == 1
    assert s01.current_streak == 2


def test_streaks_follow_record_days_but_inactivity_counts_calendar_days():
    records = [
        AttendanceRecord.of("2024-01-01", ["S01"]),
        AttendanceRecord.of("2024-01-05", ["S01"]),
    ]

    stat = compute_student_stats("S01", records, now=_utc(2024, 1, 5))

    assert stat.longest_streak == 2
    assert stat.current_streak == 2
    assert stat.longest_inactive_streak == 3


def test_favorite_day_tie_goes_to_earliest_weekday():
    stat = compute_student_stats("X", _pattern_records(), now=_utc(2024, 1, 5))

    assert stat.favorite_day == "Monday"


def test_favorite_day_with_clear_winner():
    records = [
        AttendanceRecord.of("2024-01-03", ["S01"]),  # Wednesday
        AttendanceRecord.of("2024-01-10", ["S01"]),  # Wednesday
        AttendanceRecord.of("2024-01-07", ["S01"]),  # Sunday
    ]

    assert compute_student_stats("S01", records, now=_utc(2024, 1, 10)).favorite_day == "Wednesday"


def test_never_present_student():
    records = [AttendanceRecord.of("2024-01-01", ["S01"]), AttendanceRecord.of("2024-01-02", ["S01"])]

    stat = compute_student_stats("S02", records, now=_utc(2024, 1, 2))

    assert stat.total_attended == 0
    assert stat.favorite_day == "N/A"
    assert stat.consistency_score == 0
    assert stat.longest_inactive_streak == 2


def test_consistency_score_rounds_to_one_decimal():
    records = [
        AttendanceRecord.of("2024-01-01", ["S01"]),
        AttendanceRecord.of("2024-01-02", []),
        AttendanceRecord.of("2024-01-03", []),
    ]

    assert compute_student_stats("S01", records, now=_utc(2024, 1, 3)).consistency_score == 3.3


def test_empty_history_gives_neutral_stat():
    stat = compute_student_stats("S01", [], now=_utc(2024, 1, 3))

    assert stat.total_attended == 0
    assert stat.current_streak == 0
    assert stat.longest_streak == 0
    assert stat.longest_inactive_streak == 0
    assert stat.favorite_day == "N/A"
    assert stat.consistency_score == 0


def test_student_missing_from_roster_gets_neutral_stat():
    records = [AttendanceRecord.of("2024-01-01", ["S09"])]

    stat = compute_student_stats("S09", records, [Student("S01", "A")], now=_utc(2024, 1, 1))

    assert stat.total_attended == 0
    assert stat.favorite_day == "N/A"


def test_same_inputs_give_same_result():
    records = _pattern_records()
    now = _utc(2024, 1, 5)

    assert compute_student_stats("X", records, now=now) == compute_student_stats("X", records, now=now)


def test_adding_a_present_day_never_lowers_totals():
    now = _utc(2024, 1, 6)
    before = compute_student_stats("X", _pattern_records(), now=now)
    after = compute_student_stats("X", _pattern_records() + [AttendanceRecord.of("2024-01-06", ["X"])], now=now)

    assert after.total_attended >= before.total_attended
    assert after.longest_streak >= before.longest_streak
    assert 0 <= after.consistency_score <= 10
