# --- File: attendance_app/schemas/attendance/attendance_record.py ---
"""
Attendance record and scheduled day-off schemas.

Both are immutable snapshot values: the analytics engine reads them but
never changes them. Field names are snake_case; the camelCase wire names
(`studentId`, `dateISO`, `earlyDismissal`) are accepted on input and
emitted with `model_dump(by_alias=True)`.
"""

from __future__ import annotations

from datetime import date as Date, datetime
from typing import Any

from pydantic import Field, field_validator

from attendance_app.schemas.common.base import FrozenSchema
from attendance_app.schemas.common.enums import AttendanceStatus, DayOffReason, DayOffScope
from attendance_app.utils.date_utils import is_iso_date

__all__ = [
    "AttendanceRecord",
    "PlannedDayOff",
    "coerce_iso_date",
]


def coerce_iso_date(value: Any) -> Any:
    """Normalise date objects to ISO strings and reject malformed strings."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, Date):
        return value.isoformat()
    if isinstance(value, str):
        value = value.strip()
        if not is_iso_date(value):
            raise ValueError(f"must be a calendar date in YYYY-MM-DD format, got {value!r}")
    return value


class AttendanceRecord(FrozenSchema):
    """
    One student's attendance mark for one school date.

    At most one record per (student_id, date_iso) is expected upstream.
    """

    student_id: str = Field(
        ...,
        alias="studentId",
        min_length=1,
        description="Student identifier",
    )
    date_iso: str = Field(
        ...,
        alias="dateISO",
        description="Attendance date (YYYY-MM-DD)",
    )
    status: AttendanceStatus = Field(
        ...,
        description="Attendance status",
    )
    early_dismissal: bool = Field(
        default=False,
        alias="earlyDismissal",
        description="Student left before the end of the school day",
    )

    @field_validator("date_iso", mode="before")
    @classmethod
    def validate_date_iso(cls, v: Any) -> Any:
        return coerce_iso_date(v)

    @property
    def date(self) -> Date:
        """Attendance date as a `date` object."""
        return Date.fromisoformat(self.date_iso)


class PlannedDayOff(FrozenSchema):
    """
    A date on which school is not in session for every student.

    Presence of an entry excludes the date from all statistics regardless
    of weekday.
    """

    date_iso: str = Field(
        ...,
        alias="dateISO",
        description="Day-off date (YYYY-MM-DD)",
    )
    reason: DayOffReason = Field(
        default=DayOffReason.OTHER,
        description="Why school is closed",
    )
    scope: DayOffScope = Field(
        default=DayOffScope.ALL_STUDENTS,
        description="Who the day off applies to",
    )

    @field_validator("date_iso", mode="before")
    @classmethod
    def validate_date_iso(cls, v: Any) -> Any:
        return coerce_iso_date(v)

    @property
    def date(self) -> Date:
        """Day-off date as a `date` object."""
        return Date.fromisoformat(self.date_iso)
