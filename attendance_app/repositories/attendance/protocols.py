"""
Collaborator interfaces consumed by the analytics engine.

Every read returns a fresh list: a point-in-time snapshot the caller may
iterate freely without seeing later writes.
"""

from typing import List, Protocol, runtime_checkable

from attendance_app.schemas.attendance.attendance_record import AttendanceRecord

__all__ = ["RecordStore", "DayOffStore", "StudentRoster"]


@runtime_checkable
class RecordStore(Protocol):
    """Read access to attendance records."""

    def all_attendance(self) -> List[AttendanceRecord]:
        ...

    def find_by_student_and_date_range(
        self, student_id: str, start_iso: str, end_iso: str
    ) -> List[AttendanceRecord]:
        """Records for one student with start_iso <= date_iso <= end_iso."""
        ...

    def find_by_date(self, date_iso: str) -> List[AttendanceRecord]:
        """Records of every student on one date."""
        ...


@runtime_checkable
class DayOffStore(Protocol):
    """Lookup of planned all-student days off."""

    def has_day_off(self, date_iso: str) -> bool:
        ...


@runtime_checkable
class StudentRoster(Protocol):
    """The set of enrolled students."""

    def all_student_ids(self) -> List[str]:
        ...

    def has_student(self, student_id: str) -> bool:
        ...
