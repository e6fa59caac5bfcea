# attendance_app/services/attendance/schedule_service.py
from __future__ import annotations

import logging
from typing import List

from attendance_app.core.exceptions import InvalidArgumentError
from attendance_app.schemas.attendance.attendance_record import AttendanceRecord, PlannedDayOff
from attendance_app.schemas.common.enums import AttendanceStatus, DayOffReason, DayOffScope
from attendance_app.utils.date_utils import DateLike, parse_iso_date

logger = logging.getLogger(__name__)

__all__ = ["ScheduleService"]


def _enum_arg(enum_cls, value, field: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError as e:
        raise InvalidArgumentError(field, value=value, allowed=[m.value for m in enum_cls]) from e


class ScheduleService:
    """
    School calendar maintenance.

    Registering a day off changes what the analytics engine excludes.
    Bulk-excusing a date only writes EXCUSED records and leaves the
    calendar alone, so the date still counts as a school day.
    """

    def __init__(self, day_off_store, record_store, roster) -> None:
        self._day_off_store = day_off_store
        self._record_store = record_store
        self._roster = roster

    def plan_day_off(
        self,
        date_iso: DateLike,
        reason: DayOffReason | str = DayOffReason.OTHER,
        scope: DayOffScope | str = DayOffScope.ALL_STUDENTS,
    ) -> PlannedDayOff:
        """Register a planned all-student day off, replacing any entry for that date."""
        day = parse_iso_date(date_iso, "date_iso")
        entry = PlannedDayOff(
            date_iso=day.isoformat(),
            reason=_enum_arg(DayOffReason, reason, "reason"),
            scope=_enum_arg(DayOffScope, scope, "scope"),
        )
        saved = self._day_off_store.save_day_off(entry)
        logger.info(f"operation=plan_day_off date={entry.date_iso} reason={entry.reason.value}")
        return saved

    def list_days_off(self, start_iso: DateLike, end_iso: DateLike) -> List[PlannedDayOff]:
        return self._day_off_store.list_days_off_in_range(
            parse_iso_date(start_iso, "start_iso").isoformat(),
            parse_iso_date(end_iso, "end_iso").isoformat(),
        )

    def apply_planned_day_off_to_all_students(self, date_iso: DateLike) -> int:
        """
        Write an EXCUSED record for every rostered student without a record that day.

        Existing records are never overwritten, so running this twice
        writes nothing the second time. Returns the number of records written.
        """
        day = parse_iso_date(date_iso, "date_iso").isoformat()
        written = 0
        for student_id in self._roster.all_student_ids():
            if self._record_store.find_attendance_by(student_id, day) is not None:
                continue
            self._record_store.save_attendance(
                AttendanceRecord(
                    student_id=student_id,
                    date_iso=day,
                    status=AttendanceStatus.EXCUSED,
                    early_dismissal=False,
                )
            )
            written += 1

        logger.info(f"operation=apply_planned_day_off_to_all_students date={day} written={written}")
        return written
