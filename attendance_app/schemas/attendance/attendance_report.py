# --- File: attendance_app/schemas/attendance/attendance_report.py ---
"""
Aggregated attendance counters: time buckets and year-to-date summaries.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import Field, field_validator

from attendance_app.schemas.attendance.attendance_record import coerce_iso_date
from attendance_app.schemas.common.base import FrozenSchema

__all__ = [
    "AttendanceCounts",
    "Bucket",
    "Summary",
]


class AttendanceCounts(FrozenSchema):
    """The five attendance counters shared by buckets and summaries."""

    present: int = Field(default=0, ge=0, description="Days marked PRESENT")
    late: int = Field(default=0, ge=0, description="Days marked LATE")
    absent: int = Field(default=0, ge=0, description="Days marked ABSENT")
    excused: int = Field(default=0, ge=0, description="Days marked EXCUSED")
    early_dismissal: int = Field(
        default=0,
        ge=0,
        alias="earlyDismissal",
        description="Days with an early dismissal, counted independently of status",
    )

    @property
    def total_marked(self) -> int:
        """Number of records counted by status."""
        return self.present + self.late + self.absent + self.excused

    @property
    def is_empty(self) -> bool:
        return self.total_marked == 0 and self.early_dismissal == 0

    def counters(self) -> Dict[str, int]:
        return {
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "excused": self.excused,
            "early_dismissal": self.early_dismissal,
        }


class Bucket(AttendanceCounts):
    """Aggregated counts for one daily, weekly or monthly window."""

    bucket_start_iso: str = Field(
        ...,
        alias="bucketStartISO",
        description="First date of the window (YYYY-MM-DD)",
    )

    @field_validator("bucket_start_iso", mode="before")
    @classmethod
    def validate_bucket_start(cls, v: Any) -> Any:
        return coerce_iso_date(v)


class Summary(AttendanceCounts):
    """Cumulative counts over a year-to-date range."""
    pass
