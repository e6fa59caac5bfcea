"""
SQLAlchemy-backed attendance record store.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from attendance_app.core.exceptions import RepositoryError
from attendance_app.models.attendance.attendance_record import AttendanceRecordModel
from attendance_app.repositories.base.base_repository import BaseRepository
from attendance_app.schemas.attendance.attendance_record import AttendanceRecord
from attendance_app.utils.date_utils import DateLike, parse_iso_date

logger = logging.getLogger(__name__)

__all__ = ["AttendanceRecordRepository"]


class AttendanceRecordRepository(BaseRepository[AttendanceRecordModel]):
    """
    Attendance records stored in the `attendance_records` table.

    Reads return immutable AttendanceRecord snapshots, never live rows.
    """

    def __init__(self, db: Session):
        super().__init__(AttendanceRecordModel, db)

    def _query(self, stmt) -> List[AttendanceRecord]:
        try:
            return [row.to_schema() for row in self.db.scalars(stmt).all()]
        except SQLAlchemyError as e:
            logger.error(f"Attendance query failed: {str(e)}", exc_info=True)
            raise RepositoryError(f"Attendance query failed: {str(e)}") from e

    def all_attendance(self) -> List[AttendanceRecord]:
        stmt = select(AttendanceRecordModel).order_by(
            AttendanceRecordModel.date, AttendanceRecordModel.student_id
        )
        return self._query(stmt)

    def find_by_student_and_date_range(
        self, student_id: str, start_iso: DateLike, end_iso: DateLike
    ) -> List[AttendanceRecord]:
        start = parse_iso_date(start_iso, "start_iso")
        end = parse_iso_date(end_iso, "end_iso")
        stmt = (
            select(AttendanceRecordModel)
            .where(
                AttendanceRecordModel.student_id == student_id,
                AttendanceRecordModel.date >= start,
                AttendanceRecordModel.date <= end,
            )
            .order_by(AttendanceRecordModel.date)
        )
        return self._query(stmt)

    def find_by_date(self, date_iso: DateLike) -> List[AttendanceRecord]:
        day = parse_iso_date(date_iso, "date_iso")
        stmt = (
            select(AttendanceRecordModel)
            .where(AttendanceRecordModel.date == day)
            .order_by(AttendanceRecordModel.student_id)
        )
        return self._query(stmt)

    def _find_row(self, student_id: str, day) -> Optional[AttendanceRecordModel]:
        stmt = select(AttendanceRecordModel).where(
            AttendanceRecordModel.student_id == student_id,
            AttendanceRecordModel.date == day,
        )
        return self.db.scalars(stmt).first()

    def find_attendance_by(self, student_id: str, date_iso: DateLike) -> Optional[AttendanceRecord]:
        try:
            row = self._find_row(student_id, parse_iso_date(date_iso, "date_iso"))
        except SQLAlchemyError as e:
            raise RepositoryError(f"Attendance lookup failed: {str(e)}") from e
        return row.to_schema() if row else None

    def save_attendance(self, record: AttendanceRecord, commit: bool = True) -> AttendanceRecord:
        """Insert or replace the record for (student_id, date)."""
        try:
            row = self._find_row(record.student_id, record.date)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Attendance lookup failed: {str(e)}") from e

        if row is None:
            self.create(AttendanceRecordModel.from_schema(record), commit=commit)
        else:
            row.status = record.status
            row.early_dismissal = record.early_dismissal
            self.save(row, commit=commit)
        return record
