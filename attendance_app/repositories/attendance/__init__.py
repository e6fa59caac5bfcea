from attendance_app.repositories.attendance.attendance_alert_repository import AttendanceAlertRepository
from attendance_app.repositories.attendance.attendance_record_repository import AttendanceRecordRepository
from attendance_app.repositories.attendance.in_memory import (
    InMemoryDayOffStore,
    InMemoryRecordStore,
    InMemoryStudentRoster,
)
from attendance_app.repositories.attendance.protocols import DayOffStore, RecordStore, StudentRoster
from attendance_app.repositories.attendance.schedule_repository import ScheduledDayOffRepository

__all__ = [
    "AttendanceAlertRepository",
    "AttendanceRecordRepository",
    "InMemoryDayOffStore",
    "InMemoryRecordStore",
    "InMemoryStudentRoster",
    "DayOffStore",
    "RecordStore",
    "StudentRoster",
    "ScheduledDayOffRepository",
]
