from __future__ import annotations

from enum import Enum


class StatKind(str, Enum):
    """Tag attached to a cohort metric; the UI maps it to an icon."""

    PRESENCE = "presence"
    CALENDAR = "calendar"
    ENGAGEMENT = "engagement"
    ACTIVITY = "activity"
    AWARD = "award"
    ALERT = "alert"
    STAR = "star"


class ChangeType(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"


class DayStatus(str, Enum):
    """Classification of one cell in the calendar heatmap."""

    PRESENT = "present"
    ABSENT = "absent"
    NO_RECORD = "no-record"
    FUTURE = "future"
    EMPTY = "empty"


class StorageBackend(str, Enum):
    MYSQL = "mysql"
    LOCAL = "local"
