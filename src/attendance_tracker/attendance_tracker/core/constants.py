"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Canonical weekday order (Sunday first). Also the tie-break order for day aggregates.
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

NOT_AVAILABLE = "N/A"

RECENT_WINDOW_DAYS = 7
CONSISTENCY_SCALE = 10
LOW_ATTENDANCE_THRESHOLD = 5.0

DEFAULT_TREND_WINDOW = 30
DEFAULT_CALENDAR_MONTHS = 3
MAX_CALENDAR_MONTHS = 120
DEFAULT_TOP_STUDENTS = 3
DEFAULT_INACTIVE_LIST_SIZE = 5

STUDENT_ID_PREFIX = "S"
STUDENT_ID_WIDTH = 2
