from attendance_app.models.attendance.attendance_alert import AlertThreshold, AttendanceAlert
from attendance_app.models.attendance.attendance_record import (
    AttendanceRecordModel,
    ScheduledDayOffModel,
)

__all__ = [
    "AlertThreshold",
    "AttendanceAlert",
    "AttendanceRecordModel",
    "ScheduledDayOffModel",
]
