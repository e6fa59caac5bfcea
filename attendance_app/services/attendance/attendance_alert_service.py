"""
Attendance alert service for thresholds, alert calculation and the alert lifecycle.

Handles:
- Threshold validation and storage (global or per student)
- Alert calculation over the 30-day window or year to date
- Automatic processing with parent notifications
- Dismissal, resolution and intervention listing
"""

import logging
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from attendance_app.core.exceptions import (
    ErrorCode,
    InvalidAlertTransitionError,
    RepositoryError,
)
from attendance_app.models.attendance.attendance_alert import AlertThreshold, AttendanceAlert
from attendance_app.repositories.attendance.attendance_alert_repository import AttendanceAlertRepository
from attendance_app.repositories.attendance.protocols import StudentRoster
from attendance_app.schemas.attendance.attendance_alert import (
    AlertFilters,
    AlertNotification,
    AlertThresholdCreate,
    BatchAlertResult,
)
from attendance_app.schemas.common.enums import AlertPeriod, AlertStatus, AlertType
from attendance_app.services.attendance.notifier import Notifier
from attendance_app.services.attendance.threshold_evaluator import ThresholdEvaluator
from attendance_app.services.base import BaseService, ErrorSeverity, ServiceError, ServiceResult
from attendance_app.utils.date_utils import today_utc

logger = logging.getLogger(__name__)

__all__ = ["AttendanceAlertService"]

ThresholdInput = Union[AlertThreshold, AlertThresholdCreate]


class AttendanceAlertService(BaseService[AttendanceAlert, AttendanceAlertRepository]):
    """
    Service for persisted attendance alerts.

    Counts come from the analytics engine: THIRTY_DAYS alerts use the
    trailing 30-day window ending today, CUMULATIVE alerts use the
    year-to-date summary. ABSENCE counts absences, LATENESS counts lates
    and CUMULATIVE counts both.
    """

    def __init__(
        self,
        repository: AttendanceAlertRepository,
        db_session: Session,
        evaluator: ThresholdEvaluator,
        roster: StudentRoster,
        notifier: Optional[Notifier] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        super().__init__(repository, db_session)
        self._evaluator = evaluator
        self._roster = roster
        self._notifier = notifier
        self._today_fn = today or today_utc

    def _today(self) -> date:
        return self._today_fn()

    # =========================================================================
    # Alert calculation
    # =========================================================================

    def calculate_attendance_alerts(
        self,
        period: Union[AlertPeriod, str],
    ) -> ServiceResult[List[AttendanceAlert]]:
        """
        Create or update alerts for every rostered student over one period.

        Student-specific thresholds of the period replace the global ones
        for that student. An existing ACTIVE alert of the same student,
        type and period gets its count updated; otherwise a new ACTIVE
        alert is created.
        """
        operation = "calculate_attendance_alerts"
        try:
            period = AlertPeriod(period)
        except ValueError:
            return ServiceResult.validation_failure(
                f"Invalid alert period: {period}",
                field="period",
                details={"allowed": [p.value for p in AlertPeriod]},
            )

        logger.info(f"{operation}: period={period.value}")

        try:
            global_thresholds = self.repository.find_thresholds(period=period, global_only=True)
            alerts: Dict[str, AttendanceAlert] = {}
            created = 0

            for student_id in self._roster.all_student_ids():
                thresholds = (
                    self.repository.find_thresholds(period=period, student_id=student_id)
                    or global_thresholds
                )
                if not thresholds:
                    continue

                absences, lates = self._counts_for(student_id, period)

                for threshold in thresholds:
                    count = self._count_for_type(threshold.alert_type, absences, lates)
                    if count < threshold.count:
                        continue

                    alert = self.repository.find_active_alert(student_id, threshold.alert_type, period)
                    if alert is None:
                        alert = AttendanceAlert.create_new(
                            student_id=student_id,
                            threshold_id=threshold.id,
                            alert_type=threshold.alert_type,
                            count=count,
                            period=period,
                        )
                        created += 1
                    else:
                        alert.update_count(count)
                    self.repository.save_alert(alert)
                    alerts[alert.id] = alert

            self._commit()

            logger.info(f"{operation} successful: period={period.value}, alerts={len(alerts)}, created={created}")
            return ServiceResult.success(
                list(alerts.values()),
                message=f"{len(alerts)} alert(s) triggered",
                metadata={"period": period.value, "created": created, "updated": len(alerts) - created},
            )

        except (SQLAlchemyError, RepositoryError) as e:
            return self._database_failure(e, operation, {"period": period.value})

        except Exception as e:
            self._rollback()
            return self._handle_exception(e, operation, period.value)

    def process_automatic_alerts(self) -> BatchAlertResult:
        """
        Run the alert calculation for both periods and notify parents.

        A parent notification is sent for each alert whose threshold asks
        for it and which has not been notified yet; on success the alert
        moves to PARENT_NOTIFIED. Failures are collected, never raised.
        """
        operation = "process_automatic_alerts"
        result = BatchAlertResult()
        logger.info(f"{operation}: started")

        all_alerts: List[AttendanceAlert] = []
        for period in (AlertPeriod.THIRTY_DAYS, AlertPeriod.CUMULATIVE):
            calculated = self.calculate_attendance_alerts(period)
            if not calculated:
                result.errors.append(f"Error processing {period.value} alerts: {calculated.message}")
                continue
            all_alerts.extend(calculated.data)
            result.triggered += calculated.metadata.get("created", 0)

        result.processed = len(all_alerts)

        for alert in all_alerts:
            try:
                threshold = self.repository.find_threshold(alert.threshold_id) if alert.threshold_id else None
            except RepositoryError as e:
                result.errors.append(f"Failed to load threshold for alert {alert.id}: {e.message}")
                continue

            if not threshold or not threshold.notify_parents or alert.notification_sent:
                continue

            if self._notify_parents(alert, threshold, result):
                result.notifications_sent += 1

        logger.info(
            f"{operation} finished: processed={result.processed}, triggered={result.triggered}, "
            f"notifications_sent={result.notifications_sent}, errors={len(result.errors)}"
        )
        return result

    def _notify_parents(
        self, alert: AttendanceAlert, threshold: AlertThreshold, result: BatchAlertResult
    ) -> bool:
        if self._notifier is None:
            result.errors.append(f"Failed to notify parents for alert {alert.id}: no notifier configured")
            return False

        notification = AlertNotification(
            student_id=alert.student_id,
            when_iso=self._today().isoformat(),
            reasons=[self._describe(alert, threshold)],
        )
        try:
            self._notifier.send(notification)
        except Exception as e:
            logger.error(f"Parent notification failed for alert {alert.id}: {str(e)}", exc_info=True)
            result.errors.append(f"Failed to notify parents for alert {alert.id}: {e}")
            return False

        try:
            alert.mark_parent_notified()
            self.repository.save_alert(alert)
            self._commit()
        except (InvalidAlertTransitionError, SQLAlchemyError, RepositoryError) as e:
            self._rollback()
            logger.error(f"Could not record parent notification for alert {alert.id}: {e}", exc_info=True)
            result.errors.append(f"Failed to record notification for alert {alert.id}: {e}")
            return False
        return True

    # =========================================================================
    # Alert lifecycle
    # =========================================================================

    def dismiss_alert(self, alert_id: str) -> ServiceResult[AttendanceAlert]:
        """Dismiss an ACTIVE alert."""
        return self._transition_alert(alert_id, "dismiss_alert", AttendanceAlert.dismiss)

    def resolve_alert(self, alert_id: str) -> ServiceResult[AttendanceAlert]:
        """Resolve an ACTIVE or PARENT_NOTIFIED alert."""
        return self._transition_alert(alert_id, "resolve_alert", AttendanceAlert.resolve)

    def _transition_alert(
        self,
        alert_id: str,
        operation: str,
        transition: Callable[[AttendanceAlert], None],
    ) -> ServiceResult[AttendanceAlert]:
        logger.info(f"{operation}: alert_id={alert_id}")
        try:
            alert = self.repository.find_alert(alert_id)
            if alert is None:
                return ServiceResult.failure(
                    ServiceError(
                        code=ErrorCode.RESOURCE_NOT_FOUND,
                        message=f"Alert not found: {alert_id}",
                        severity=ErrorSeverity.WARNING,
                        details={"alert_id": alert_id},
                    )
                )

            transition(alert)
            self.repository.save_alert(alert)
            self._commit()

            logger.info(f"{operation} successful: alert_id={alert_id}, status={alert.status.value}")
            return ServiceResult.success(
                alert,
                message=f"Alert {alert.status.value.lower()}",
                metadata={"alert_id": alert_id},
            )

        except InvalidAlertTransitionError as e:
            self._rollback()
            logger.warning(f"{operation} rejected: {e.message}")
            return ServiceResult.failure(
                ServiceError(
                    code=e.error_code,
                    message=e.message,
                    severity=ErrorSeverity.WARNING,
                    details=e.details,
                )
            )

        except (SQLAlchemyError, RepositoryError) as e:
            return self._database_failure(e, operation, {"alert_id": alert_id})

        except Exception as e:
            self._rollback()
            return self._handle_exception(e, operation, alert_id)

    def get_alerts_requiring_intervention(
        self,
        filters: Optional[AlertFilters] = None,
    ) -> ServiceResult[List[AttendanceAlert]]:
        """List alerts matching the filters; ACTIVE alerts only unless statuses are given."""
        operation = "get_alerts_requiring_intervention"
        filters = filters or AlertFilters()
        statuses = filters.statuses or [AlertStatus.ACTIVE]
        logger.debug(f"{operation}: student_id={filters.student_id}, statuses={[s.value for s in statuses]}")

        try:
            alerts = self.repository.find_alerts(
                student_id=filters.student_id,
                statuses=statuses,
                alert_types=filters.alert_types,
                period=filters.period,
            )
            return ServiceResult.success(alerts, metadata={"count": len(alerts)})

        except (SQLAlchemyError, RepositoryError) as e:
            return self._database_failure(e, operation)

    # =========================================================================
    # Thresholds
    # =========================================================================

    def validate_threshold_settings(self, threshold: ThresholdInput) -> ServiceResult[None]:
        """
        Check threshold business rules.

        Count must be positive, type and period must be known, and a
        student-specific threshold must name a rostered student.
        """
        errors: List[str] = []

        if threshold.count is None or threshold.count <= 0:
            errors.append("Threshold count must be greater than zero")

        try:
            AlertType(threshold.alert_type)
        except ValueError:
            errors.append("Invalid alert type")

        try:
            AlertPeriod(threshold.period)
        except ValueError:
            errors.append("Invalid alert period")

        if threshold.student_id is not None and not self._roster.has_student(threshold.student_id):
            errors.append(f"Student with ID {threshold.student_id} not found")

        if errors:
            return ServiceResult.failure(
                ServiceError(
                    code=ErrorCode.VALIDATION_ERROR,
                    message="Threshold validation failed",
                    severity=ErrorSeverity.WARNING,
                    details={"errors": errors},
                )
            )

        return ServiceResult.success(None)

    def save_threshold(self, threshold: ThresholdInput) -> ServiceResult[AlertThreshold]:
        """Validate and store a threshold. Existing thresholds are updated in place."""
        operation = "save_threshold"
        logger.info(
            f"{operation}: type={threshold.alert_type}, count={threshold.count}, "
            f"period={threshold.period}, student_id={threshold.student_id}"
        )

        validation = self.validate_threshold_settings(threshold)
        if not validation:
            return validation

        try:
            if isinstance(threshold, AlertThresholdCreate):
                threshold = AlertThreshold(
                    alert_type=threshold.alert_type,
                    count=threshold.count,
                    period=threshold.period,
                    student_id=threshold.student_id,
                    notify_parents=threshold.notify_parents,
                )
            saved = self.repository.save_threshold(threshold)
            self._commit()

            logger.info(f"{operation} successful: threshold_id={saved.id}")
            return ServiceResult.success(
                saved,
                message="Threshold saved successfully",
                metadata={"threshold_id": saved.id},
            )

        except (SQLAlchemyError, RepositoryError) as e:
            return self._database_failure(e, operation)

        except Exception as e:
            self._rollback()
            return self._handle_exception(e, operation)

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    def _counts_for(self, student_id: str, period: AlertPeriod) -> Tuple[int, int]:
        if period is AlertPeriod.THIRTY_DAYS:
            return self._evaluator.rolling_window_counts(student_id, self._today())
        return self._evaluator.cumulative_counts(student_id)

    @staticmethod
    def _count_for_type(alert_type: AlertType, absences: int, lates: int) -> int:
        if alert_type is AlertType.ABSENCE:
            return absences
        if alert_type is AlertType.LATENESS:
            return lates
        return absences + lates

    @staticmethod
    def _describe(alert: AttendanceAlert, threshold: AlertThreshold) -> str:
        window = "in last 30 days" if alert.period is AlertPeriod.THIRTY_DAYS else "year to date"
        kind = {
            AlertType.ABSENCE: "absences",
            AlertType.LATENESS: "lates",
            AlertType.CUMULATIVE: "absences and lates",
        }[alert.alert_type]
        return f"{kind} {window} ({alert.count}) >= threshold ({threshold.count})"
