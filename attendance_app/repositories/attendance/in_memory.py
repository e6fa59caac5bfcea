"""
In-memory stores for attendance records, days off and the student roster.

Used by tests and by callers that already hold their data in memory.
Reads copy the underlying list so a returned snapshot never changes.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from attendance_app.schemas.attendance.attendance_record import AttendanceRecord, PlannedDayOff
from attendance_app.utils.date_utils import DateLike, parse_iso_date

logger = logging.getLogger(__name__)

__all__ = [
    "InMemoryRecordStore",
    "InMemoryDayOffStore",
    "InMemoryStudentRoster",
]


class InMemoryRecordStore:
    """Attendance records keyed by (student_id, date_iso)."""

    def __init__(self, records: Optional[Iterable[AttendanceRecord]] = None):
        self._records: Dict[Tuple[str, str], AttendanceRecord] = {}
        for record in records or []:
            self.save_attendance(record)

    def save_attendance(self, record: AttendanceRecord) -> AttendanceRecord:
        """Insert a record, replacing any existing one for the same student and date."""
        key = (record.student_id, record.date_iso)
        if key in self._records:
            logger.debug(f"Replacing attendance for student {record.student_id} on {record.date_iso}")
        self._records[key] = record
        return record

    def find_attendance_by(self, student_id: str, date_iso: DateLike) -> Optional[AttendanceRecord]:
        day = parse_iso_date(date_iso, "date_iso").isoformat()
        return self._records.get((student_id, day))

    def all_attendance(self) -> List[AttendanceRecord]:
        return list(self._records.values())

    def find_by_student_and_date_range(
        self, student_id: str, start_iso: DateLike, end_iso: DateLike
    ) -> List[AttendanceRecord]:
        start = parse_iso_date(start_iso, "start_iso").isoformat()
        end = parse_iso_date(end_iso, "end_iso").isoformat()
        return [
            r for r in self._records.values()
            if r.student_id == student_id and start <= r.date_iso <= end
        ]

    def find_by_date(self, date_iso: DateLike) -> List[AttendanceRecord]:
        day = parse_iso_date(date_iso, "date_iso").isoformat()
        return [r for r in self._records.values() if r.date_iso == day]

    def __len__(self) -> int:
        return len(self._records)


class InMemoryDayOffStore:
    """Planned days off keyed by date."""

    def __init__(self, days_off: Optional[Iterable[PlannedDayOff]] = None):
        self._days_off: Dict[str, PlannedDayOff] = {}
        for entry in days_off or []:
            self.save_day_off(entry)

    def save_day_off(self, entry: PlannedDayOff) -> PlannedDayOff:
        """Register a day off, replacing any entry for the same date."""
        self._days_off[entry.date_iso] = entry
        return entry

    def has_day_off(self, date_iso: DateLike) -> bool:
        day = parse_iso_date(date_iso, "date_iso").isoformat()
        return day in self._days_off

    def all_days_off(self) -> List[PlannedDayOff]:
        return sorted(self._days_off.values(), key=lambda d: d.date_iso)

    def list_days_off_in_range(self, start_iso: DateLike, end_iso: DateLike) -> List[PlannedDayOff]:
        start = parse_iso_date(start_iso, "start_iso").isoformat()
        end = parse_iso_date(end_iso, "end_iso").isoformat()
        return [d for d in self.all_days_off() if start <= d.date_iso <= end]


class InMemoryStudentRoster:
    """Enrolled student ids in insertion order."""

    def __init__(self, student_ids: Optional[Iterable[str]] = None):
        self._student_ids: List[str] = []
        for student_id in student_ids or []:
            self.add_student(student_id)

    def add_student(self, student_id: str) -> None:
        if student_id not in self._student_ids:
            self._student_ids.append(student_id)

    def all_student_ids(self) -> List[str]:
        return list(self._student_ids)

    def has_student(self, student_id: str) -> bool:
        return student_id in self._student_ids
