"""
SQLAlchemy models for the attendance persistence adapters.
"""

from attendance_app.models.base import Base, BaseModel, TimestampModel
from attendance_app.models.attendance import (
    AlertThreshold,
    AttendanceAlert,
    AttendanceRecordModel,
    ScheduledDayOffModel,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "AlertThreshold",
    "AttendanceAlert",
    "AttendanceRecordModel",
    "ScheduledDayOffModel",
]
