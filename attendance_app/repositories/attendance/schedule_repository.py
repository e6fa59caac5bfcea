"""
SQLAlchemy-backed planned day-off store.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from attendance_app.core.exceptions import RepositoryError
from attendance_app.models.attendance.attendance_record import ScheduledDayOffModel
from attendance_app.repositories.base.base_repository import BaseRepository
from attendance_app.schemas.attendance.attendance_record import PlannedDayOff
from attendance_app.utils.date_utils import DateLike, parse_iso_date

logger = logging.getLogger(__name__)

__all__ = ["ScheduledDayOffRepository"]


class ScheduledDayOffRepository(BaseRepository[ScheduledDayOffModel]):
    """Days off stored in the `scheduled_days_off` table."""

    def __init__(self, db: Session):
        super().__init__(ScheduledDayOffModel, db)

    def has_day_off(self, date_iso: DateLike) -> bool:
        day = parse_iso_date(date_iso, "date_iso")
        try:
            stmt = select(ScheduledDayOffModel.id).where(ScheduledDayOffModel.date == day)
            return self.db.scalars(stmt).first() is not None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Day-off lookup failed: {str(e)}") from e

    def save_day_off(self, entry: PlannedDayOff, commit: bool = True) -> PlannedDayOff:
        """Register a day off, replacing the reason of an existing entry for that date."""
        try:
            row = self.db.scalars(
                select(ScheduledDayOffModel).where(ScheduledDayOffModel.date == entry.date)
            ).first()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Day-off lookup failed: {str(e)}") from e

        if row is None:
            row = ScheduledDayOffModel(date=entry.date, reason=entry.reason, scope=entry.scope)
            self.create(row, commit=commit)
        else:
            row.reason = entry.reason
            row.scope = entry.scope
            self.save(row, commit=commit)
        logger.info(f"Day off saved for {entry.date_iso} ({entry.reason.value})")
        return row.to_schema()

    def all_days_off(self) -> List[PlannedDayOff]:
        stmt = select(ScheduledDayOffModel).order_by(ScheduledDayOffModel.date)
        try:
            return [row.to_schema() for row in self.db.scalars(stmt).all()]
        except SQLAlchemyError as e:
            raise RepositoryError(f"Day-off listing failed: {str(e)}") from e

    def list_days_off_in_range(self, start_iso: DateLike, end_iso: DateLike) -> List[PlannedDayOff]:
        start = parse_iso_date(start_iso, "start_iso")
        end = parse_iso_date(end_iso, "end_iso")
        stmt = (
            select(ScheduledDayOffModel)
            .where(ScheduledDayOffModel.date >= start, ScheduledDayOffModel.date <= end)
            .order_by(ScheduledDayOffModel.date)
        )
        try:
            return [row.to_schema() for row in self.db.scalars(stmt).all()]
        except SQLAlchemyError as e:
            raise RepositoryError(f"Day-off listing failed: {str(e)}") from e
