from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from ..attendance.model import AttendanceRecord
from ..core.enums import ChangeType, DayStatus, StatKind
from ..students.model import Student


@dataclass(frozen=True)
class PreparedRecords:
    """Records deduplicated by date and sorted ascending, plus how many were dropped."""

    records: Tuple[AttendanceRecord, ...]
    skipped: int = 0


@dataclass(frozen=True)
class StudentStat:
    student_id: str
    total_attended: int
    current_streak: int
    longest_streak: int
    longest_inactive_streak: int
    favorite_day: str
    consistency_score: float

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "total_attended": self.total_attended,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "longest_inactive_streak": self.longest_inactive_streak,
            "favorite_day": self.favorite_day,
            "consistency_score": self.consistency_score,
        }


@dataclass(frozen=True)
class CohortStat:
    """A labeled metric; `change` is the week-over-week delta when present."""

    name: str
    value: Union[int, str]
    kind: StatKind
    change: Optional[int] = None
    change_type: Optional[ChangeType] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "value": self.value,
            "kind": self.kind.value,
            "change": self.change,
            "change_type": self.change_type.value if self.change_type else None,
        }


@dataclass(frozen=True)
class RankedStudent:
    student: Student
    score: float

    def to_dict(self) -> dict:
        return {"student": self.student.to_dict(), "score": self.score}


@dataclass(frozen=True)
class TrendPoint:
    date: str
    present_count: int
    absent_count: int

    def to_dict(self) -> dict:
        return {"date": self.date, "present": self.present_count, "absent": self.absent_count}


@dataclass(frozen=True)
class CalendarDay:
    date: str
    status: DayStatus

    def to_dict(self) -> dict:
        return {"date": self.date, "status": self.status.value}


@dataclass(frozen=True)
class AdvancedStats:
    longest_inactive_streaks: Tuple[RankedStudent, ...]
    most_common_dropout_day: str
    student_of_the_week: Optional[RankedStudent]
    top_regulars: Tuple[RankedStudent, ...]
    low_attendance: Tuple[RankedStudent, ...]

    def to_dict(self) -> dict:
        return {
            "longest_inactive_streaks": [r.to_dict() for r in self.longest_inactive_streaks],
            "most_common_dropout_day": self.most_common_dropout_day,
            "student_of_the_week": self.student_of_the_week.to_dict() if self.student_of_the_week else None,
            "top_regulars": [r.to_dict() for r in self.top_regulars],
            "low_attendance": [r.to_dict() for r in self.low_attendance],
        }


@dataclass(frozen=True)
class DashboardReport:
    """Read-model for the dashboard page."""

    stats: Tuple[CohortStat, ...]
    advanced: AdvancedStats
    trend: Tuple[TrendPoint, ...]
    skipped_records: int = 0

    def to_dict(self) -> dict:
        return {
            "stats": [s.to_dict() for s in self.stats],
            "advanced": self.advanced.to_dict(),
            "trend": [p.to_dict() for p in self.trend],
            "skipped_records": self.skipped_records,
        }


@dataclass(frozen=True)
class StudentReport:
    student: Student
    stats: StudentStat
    calendar: Tuple[CalendarDay, ...] = field(default_factory=tuple)
    skipped_records: int = 0

    def to_dict(self) -> dict:
        return {
            "student": self.student.to_dict(),
            "stats": self.stats.to_dict(),
            "calendar": [d.to_dict() for d in self.calendar],
            "skipped_records": self.skipped_records,
        }
