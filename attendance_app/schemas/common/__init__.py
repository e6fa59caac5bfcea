from attendance_app.schemas.common.base import BaseFilterSchema, BaseSchema, FrozenSchema
from attendance_app.schemas.common.enums import (
    AlertPeriod,
    AlertStatus,
    AlertType,
    AttendanceStatus,
    DayOffReason,
    DayOffScope,
    OffDayStrategy,
    Timeframe,
)

__all__ = [
    "BaseFilterSchema",
    "BaseSchema",
    "FrozenSchema",
    "AlertPeriod",
    "AlertStatus",
    "AlertType",
    "AttendanceStatus",
    "DayOffReason",
    "DayOffScope",
    "OffDayStrategy",
    "Timeframe",
]
