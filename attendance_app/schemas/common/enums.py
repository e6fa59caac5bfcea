# --- File: attendance_app/schemas/common/enums.py ---
"""
All enumeration types used across the application.

These enums represent the core domain concepts for school attendance
analytics (attendance statuses, reporting timeframes, scheduled days off,
alert lifecycle).
"""

from enum import Enum

__all__ = [
    "AttendanceStatus",
    "Timeframe",
    "DayOffReason",
    "DayOffScope",
    "OffDayStrategy",
    "AlertStatus",
    "AlertType",
    "AlertPeriod",
]


class AttendanceStatus(str, Enum):
    """Attendance status enumeration."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"


class Timeframe(str, Enum):
    """Bucket width for attendance history."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class DayOffReason(str, Enum):
    """Reason for a scheduled day off."""

    HOLIDAY = "HOLIDAY"
    PROF_DEV = "PROF_DEV"
    REPORT_CARD = "REPORT_CARD"
    OTHER = "OTHER"


class DayOffScope(str, Enum):
    """Who a scheduled day off applies to."""

    ALL_STUDENTS = "ALL_STUDENTS"


class OffDayStrategy(str, Enum):
    """How the off-day oracle decides that school was not in session."""

    CALENDAR = "calendar"
    ROSTER_EXCUSED = "roster_excused"


class AlertStatus(str, Enum):
    """Lifecycle state of a persisted attendance alert."""

    ACTIVE = "ACTIVE"
    DISMISSED = "DISMISSED"
    PARENT_NOTIFIED = "PARENT_NOTIFIED"
    RESOLVED = "RESOLVED"


class AlertType(str, Enum):
    """Kind of attendance issue a threshold monitors."""

    ABSENCE = "ABSENCE"
    LATENESS = "LATENESS"
    CUMULATIVE = "CUMULATIVE"


class AlertPeriod(str, Enum):
    """Time span a threshold is evaluated over."""

    THIRTY_DAYS = "THIRTY_DAYS"
    CUMULATIVE = "CUMULATIVE"
