from attendance_app.services.attendance.analytics import AttendanceAnalytics
from attendance_app.services.attendance.attendance_aggregator import AttendanceAggregator
from attendance_app.services.attendance.attendance_alert_service import AttendanceAlertService
from attendance_app.services.attendance.notifier import LoggingNotifier, Notifier
from attendance_app.services.attendance.off_day_oracle import OffDayOracle
from attendance_app.services.attendance.schedule_service import ScheduleService
from attendance_app.services.attendance.threshold_evaluator import ROLLING_WINDOW_DAYS, ThresholdEvaluator
from attendance_app.services.attendance.year_to_date_summarizer import YearToDateSummarizer

__all__ = [
    "AttendanceAnalytics",
    "AttendanceAggregator",
    "AttendanceAlertService",
    "LoggingNotifier",
    "Notifier",
    "OffDayOracle",
    "ScheduleService",
    "ROLLING_WINDOW_DAYS",
    "ThresholdEvaluator",
    "YearToDateSummarizer",
]
