from attendance_app.schemas.attendance.attendance_alert import (
    AlertFilters,
    AlertNotification,
    AlertResult,
    AlertRules,
    AlertThresholdCreate,
    BatchAlertResult,
)
from attendance_app.schemas.attendance.attendance_record import AttendanceRecord, PlannedDayOff
from attendance_app.schemas.attendance.attendance_report import AttendanceCounts, Bucket, Summary

__all__ = [
    "AlertFilters",
    "AlertNotification",
    "AlertResult",
    "AlertRules",
    "AlertThresholdCreate",
    "BatchAlertResult",
    "AttendanceRecord",
    "PlannedDayOff",
    "AttendanceCounts",
    "Bucket",
    "Summary",
]
