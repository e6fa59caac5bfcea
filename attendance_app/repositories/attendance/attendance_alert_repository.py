"""
Attendance alert repository for persisted alerts and their thresholds.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from attendance_app.core.exceptions import RepositoryError
from attendance_app.models.attendance.attendance_alert import AlertThreshold, AttendanceAlert
from attendance_app.repositories.base.base_repository import BaseRepository
from attendance_app.schemas.common.enums import AlertPeriod, AlertStatus, AlertType

logger = logging.getLogger(__name__)

__all__ = ["AttendanceAlertRepository"]


class AttendanceAlertRepository(BaseRepository[AttendanceAlert]):
    """
    Repository for attendance alerts and alert thresholds.

    Writes flush by default and leave the commit to the calling service.
    """

    def __init__(self, db: Session):
        super().__init__(AttendanceAlert, db)

    # ==================== Alerts ====================

    def save_alert(self, alert: AttendanceAlert) -> AttendanceAlert:
        return self.save(alert, commit=False)

    def find_alert(self, alert_id: str) -> Optional[AttendanceAlert]:
        return self.find_by_id(alert_id)

    def find_alerts(
        self,
        student_id: Optional[str] = None,
        statuses: Optional[Sequence[AlertStatus]] = None,
        alert_types: Optional[Sequence[AlertType]] = None,
        period: Optional[AlertPeriod] = None,
    ) -> List[AttendanceAlert]:
        """List alerts matching every given filter, newest first."""
        stmt = select(AttendanceAlert)
        if student_id is not None:
            stmt = stmt.where(AttendanceAlert.student_id == student_id)
        if statuses:
            stmt = stmt.where(AttendanceAlert.status.in_(list(statuses)))
        if alert_types:
            stmt = stmt.where(AttendanceAlert.alert_type.in_(list(alert_types)))
        if period is not None:
            stmt = stmt.where(AttendanceAlert.period == period)
        stmt = stmt.order_by(AttendanceAlert.created_at.desc(), AttendanceAlert.id)

        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"Alert listing failed: {str(e)}", exc_info=True)
            raise RepositoryError(f"Alert listing failed: {str(e)}") from e

    def find_active_alert(
        self, student_id: str, alert_type: AlertType, period: AlertPeriod
    ) -> Optional[AttendanceAlert]:
        """The ACTIVE alert for a student, type and period, if one exists."""
        alerts = self.find_alerts(
            student_id=student_id,
            statuses=[AlertStatus.ACTIVE],
            alert_types=[alert_type],
            period=period,
        )
        return alerts[0] if alerts else None

    # ==================== Thresholds ====================

    def save_threshold(self, threshold: AlertThreshold) -> AlertThreshold:
        try:
            self.db.add(threshold)
            self.db.flush()
            return threshold
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Threshold save failed: {str(e)}") from e

    def find_threshold(self, threshold_id: str) -> Optional[AlertThreshold]:
        try:
            return self.db.get(AlertThreshold, threshold_id)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Threshold lookup failed: {str(e)}") from e

    def find_thresholds(
        self,
        period: Optional[AlertPeriod] = None,
        student_id: Optional[str] = None,
        global_only: bool = False,
    ) -> List[AlertThreshold]:
        """
        List thresholds.

        With global_only, only thresholds without a student are returned;
        otherwise student_id narrows to that student's thresholds.
        """
        stmt = select(AlertThreshold)
        if period is not None:
            stmt = stmt.where(AlertThreshold.period == period)
        if global_only:
            stmt = stmt.where(AlertThreshold.student_id.is_(None))
        elif student_id is not None:
            stmt = stmt.where(AlertThreshold.student_id == student_id)
        stmt = stmt.order_by(AlertThreshold.created_at, AlertThreshold.id)

        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Threshold listing failed: {str(e)}") from e

    def delete_threshold(self, threshold: AlertThreshold) -> None:
        try:
            self.db.delete(threshold)
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(f"Threshold delete failed: {str(e)}") from e
