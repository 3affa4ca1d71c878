from __future__ import annotations

from datetime import datetime, timezone

from src.attendance_tracker.attendance_tracker.analytics.cohort import (
    compute_advanced_stats,
    compute_cohort_stats,
    longest_inactive_streaks,
    low_attendance,
    most_active_day,
    most_common_dropout_day,
    overall_attendance,
    student_of_the_week,
    top_regulars,
)
from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.core.enums import ChangeType, StatKind
from src.attendance_tracker.attendance_tracker.students.model import Student

TWO = [Student("S01", "A"), Student("S02", "B")]


def _utc(year, month, day):
    return datetime(year, month, day, 12, tzinfo=timezone.utc)


def _scenario():
    return [
        AttendanceRecord.of("2024-01-01", ["S01", "S02"]),
        AttendanceRecord.of("2024-01-02", ["S01"]),
    ]


def test_scenario_overall_attendance_and_dropout_day():
    assert overall_attendance(_scenario(), TWO) == 75
    assert most_common_dropout_day(_scenario(), TWO) == "Tuesday"


def test_cohort_stats_for_scenario():
    stats = compute_cohort_stats(_scenario(), TWO, now=_utc(2024, 1, 2))
    by_name = {s.name: s for s in stats}

    assert [s.name for s in stats] == [
        "Today's Attendance",
        "Overall Attendance %",
        "Class Engagement (7d)",
        "Most Active Day",
        "Longest Class Streak",
        "Most Common Dropout Day",
    ]
    assert by_name["Today's Attendance"].value == "1 / 2"
    assert by_name["Overall Attendance %"].value == 75
    assert by_name["Class Engagement (7d)"].value == 75
    assert by_name["Class Engagement (7d)"].change == 75
    assert by_name["Class Engagement (7d)"].change_type == ChangeType.INCREASE
    assert by_name["Most Active Day"].value == "Monday"
    assert by_name["Longest Class Streak"].value == 2
    assert by_name["Most Common Dropout Day"].kind == StatKind.ALERT


def test_cohort_stats_on_empty_inputs_are_neutral():
    stats = compute_cohort_stats([], [], now=_utc(2024, 1, 2))

    assert [s.value for s in stats] == ["Not Taken", 0, 0, "N/A", 0, "N/A"]
    assert stats[2].change == 0


def test_week_over_week_decrease():
    records = [
        AttendanceRecord.of("2024-01-02", ["S01", "S02"]),
        AttendanceRecord.of("2024-01-09", ["S01"]),
    ]

    engagement = compute_cohort_stats(records, TWO, now=_utc(2024, 1, 14))[2]

    assert engagement.value == 50
    assert engagement.change == -50
    assert engagement.change_type == ChangeType.DECREASE


def test_percentage_rounds_half_up():
    roster = [Student(f"S{i:02d}", str(i)) for i in range(1, 9)]

    assert overall_attendance([AttendanceRecord.of("2024-01-01", ["S01"])], roster) == 13


def test_unknown_ids_count_as_present_but_stay_within_bounds():
    records = [AttendanceRecord.of("2024-01-01", ["S01", "S99"])]

    assert overall_attendance(records, [Student("S01", "A")]) == 100
    assert most_common_dropout_day(records, [Student("S01", "A")]) == "Monday"


def test_day_ties_break_in_sunday_to_saturday_order():
    records = [
        AttendanceRecord.of("2024-01-02", ["S02"]),  # Tuesday
        AttendanceRecord.of("2024-01-01", ["S01"]),  # Monday
    ]

    assert most_common_dropout_day(records, TWO) == "Monday"
    assert most_common_dropout_day(list(reversed(records)), TWO) == "Monday"
    assert most_active_day(records) == "Monday"

    weekend = [AttendanceRecord.of("2024-01-06", []), AttendanceRecord.of("2024-01-07", [])]
    assert most_common_dropout_day(weekend, TWO) == "Sunday"


def test_most_active_day_without_records():
    assert most_active_day([]) == "N/A"


def test_student_of_the_week_combines_presence_and_streak(roster, fixed_now):
    records = [
        AttendanceRecord.of("2024-01-01", ["S03"]),  # outside the window
        AttendanceRecord.of("2024-01-08", ["S01", "S02"]),
        AttendanceRecord.of("2024-01-09", ["S02"]),
        AttendanceRecord.of("2024-01-10", ["S01", "S02"]),
    ]

    winner = student_of_the_week(records, roster, now=fixed_now)

    assert winner.student.student_id == "S02"
    assert winner.score == 6


def test_student_of_the_week_tie_goes_to_roster_order(roster, fixed_now):
    records = [AttendanceRecord.of("2024-01-10", ["S02", "S03"])]

    assert student_of_the_week(records, roster, now=fixed_now).student.student_id == "S02"


def test_student_of_the_week_ignores_streak_that_ended_before_yesterday(roster, fixed_now):
    records = [
        AttendanceRecord.of("2024-01-05", ["S01", "S02"]),
        AttendanceRecord.of("2024-01-06", ["S01", "S02"]),
        AttendanceRecord.of("2024-01-07", ["S01"]),
    ]

    winner = student_of_the_week(records, roster, now=fixed_now)

    # Latest record is three days old, so only days present count.
    assert winner.student.student_id == "S01"
    assert winner.score == 3


def test_no_student_of_the_week_without_recent_records(roster, fixed_now):
    assert student_of_the_week([AttendanceRecord.of("2023-12-01", ["S01"])], roster, now=fixed_now) is None


def test_top_regulars_sorted_with_stable_ties(roster):
    records = [
        AttendanceRecord.of("2024-01-01", ["S02", "S03"]),
        AttendanceRecord.of("2024-01-02", ["S02", "S01"]),
        AttendanceRecord.of("2024-01-03", ["S02"]),
    ]

    top = top_regulars(records, roster, 2)

    assert [(r.student.student_id, r.score) for r in top] == [("S02", 3), ("S01", 1)]


def test_low_attendance_lists_lowest_first(roster, fixed_now):
    records = [
        AttendanceRecord.of("2024-01-01", ["S01", "S02"]),
        AttendanceRecord.of("2024-01-02", ["S01"]),
        AttendanceRecord.of("2024-01-03", ["S01"]),
        AttendanceRecord.of("2024-01-04", ["S01"]),
    ]

    low = low_attendance(records, roster, now=fixed_now)

    assert [(r.student.student_id, r.score) for r in low] == [("S03", 0.0), ("S02", 2.5)]
    assert low_attendance([], roster, now=fixed_now) == []


def test_longest_inactive_streaks(roster):
    records = [
        AttendanceRecord.of("2024-01-01", ["S01", "S02"]),
        AttendanceRecord.of("2024-01-02", ["S01"]),
        AttendanceRecord.of("2024-01-03", ["S01"]),
    ]

    ranked = longest_inactive_streaks(records, roster, now=_utc(2024, 1, 3), count=2)

    assert [(r.student.student_id, r.score) for r in ranked] == [("S03", 3), ("S02", 2)]


def test_advanced_stats_bundle(roster, fixed_now):
    advanced = compute_advanced_stats([], roster, now=fixed_now)

    assert advanced.longest_inactive_streaks == ()
    assert advanced.most_common_dropout_day == "N/A"
    assert advanced.student_of_the_week is None
    assert [r.score for r in advanced.top_regulars] == [0, 0, 0]
    assert advanced.low_attendance == ()
