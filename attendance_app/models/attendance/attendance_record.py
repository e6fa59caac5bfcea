# --- File: attendance_app/models/attendance/attendance_record.py ---
"""
Attendance record and scheduled day-off tables.

Rows are converted to immutable schema objects on every read so the
analytics engine only ever sees point-in-time snapshots.
"""

from datetime import date as Date

from sqlalchemy import Boolean, Date as SQLDate, Enum as SQLEnum, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from attendance_app.models.base.base_model import TimestampModel
from attendance_app.schemas.attendance.attendance_record import AttendanceRecord, PlannedDayOff
from attendance_app.schemas.common.enums import AttendanceStatus, DayOffReason, DayOffScope

__all__ = [
    "AttendanceRecordModel",
    "ScheduledDayOffModel",
]


class AttendanceRecordModel(TimestampModel):
    """One attendance mark per student per date."""

    __tablename__ = "attendance_records"

    student_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Student identifier",
    )
    date: Mapped[Date] = mapped_column(
        SQLDate,
        nullable=False,
        index=True,
        comment="Attendance date",
    )
    status: Mapped[AttendanceStatus] = mapped_column(
        SQLEnum(AttendanceStatus, name="attendance_status"),
        nullable=False,
        comment="Attendance status",
    )
    early_dismissal: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Student left early",
    )

    __table_args__ = (
        UniqueConstraint("student_id", "date", name="uq_attendance_student_date"),
        Index("idx_attendance_student_date", "student_id", "date"),
    )

    def to_schema(self) -> AttendanceRecord:
        return AttendanceRecord(
            student_id=self.student_id,
            date_iso=self.date.isoformat(),
            status=self.status,
            early_dismissal=bool(self.early_dismissal),
        )

    @classmethod
    def from_schema(cls, record: AttendanceRecord) -> "AttendanceRecordModel":
        return cls(
            student_id=record.student_id,
            date=record.date,
            status=record.status,
            early_dismissal=record.early_dismissal,
        )

    def __repr__(self) -> str:
        return (
            f"<AttendanceRecordModel(student_id={self.student_id}, "
            f"date={self.date}, status={self.status})>"
        )


class ScheduledDayOffModel(TimestampModel):
    """A date on which school is closed for every student."""

    __tablename__ = "scheduled_days_off"

    date: Mapped[Date] = mapped_column(
        SQLDate,
        nullable=False,
        unique=True,
        index=True,
        comment="Day-off date",
    )
    reason: Mapped[DayOffReason] = mapped_column(
        SQLEnum(DayOffReason, name="day_off_reason"),
        nullable=False,
        default=DayOffReason.OTHER,
    )
    scope: Mapped[DayOffScope] = mapped_column(
        SQLEnum(DayOffScope, name="day_off_scope"),
        nullable=False,
        default=DayOffScope.ALL_STUDENTS,
    )

    def to_schema(self) -> PlannedDayOff:
        return PlannedDayOff(
            date_iso=self.date.isoformat(),
            reason=self.reason,
            scope=self.scope,
        )

    def __repr__(self) -> str:
        return f"<ScheduledDayOffModel(date={self.date}, reason={self.reason})>"
