# --- File: attendance_app/models/attendance/attendance_alert.py ---
"""
Attendance alert models for proactive monitoring.

AlertThreshold stores the configured limits (global or per student).
AttendanceAlert stores one raised alert and guards its lifecycle:

    ACTIVE -> DISMISSED
    ACTIVE -> PARENT_NOTIFIED -> RESOLVED
    ACTIVE -> RESOLVED

DISMISSED and RESOLVED are terminal.
"""

from typing import Dict, FrozenSet, Optional

from sqlalchemy import Boolean, Enum as SQLEnum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from attendance_app.core.exceptions import InvalidAlertTransitionError, InvalidArgumentError
from attendance_app.models.base.base_model import TimestampModel
from attendance_app.schemas.common.enums import AlertPeriod, AlertStatus, AlertType

__all__ = [
    "AlertThreshold",
    "AttendanceAlert",
    "ALLOWED_TRANSITIONS",
]


ALLOWED_TRANSITIONS: Dict[AlertStatus, FrozenSet[AlertStatus]] = {
    AlertStatus.ACTIVE: frozenset(
        {AlertStatus.DISMISSED, AlertStatus.PARENT_NOTIFIED, AlertStatus.RESOLVED}
    ),
    AlertStatus.PARENT_NOTIFIED: frozenset({AlertStatus.RESOLVED}),
    AlertStatus.DISMISSED: frozenset(),
    AlertStatus.RESOLVED: frozenset(),
}


class AlertThreshold(TimestampModel):
    """
    Configured alert limit.

    A threshold with no student_id applies to every student that has no
    student-specific threshold for the same period.
    """

    __tablename__ = "alert_thresholds"

    alert_type: Mapped[AlertType] = mapped_column(
        SQLEnum(AlertType, name="alert_type"),
        nullable=False,
        comment="Monitored attendance issue",
    )
    count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Occurrences that trigger an alert",
    )
    period: Mapped[AlertPeriod] = mapped_column(
        SQLEnum(AlertPeriod, name="alert_period"),
        nullable=False,
        comment="Evaluation window",
    )
    student_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        comment="Student the threshold applies to (NULL = all students)",
    )
    notify_parents: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    __table_args__ = (
        Index("idx_threshold_period_student", "period", "student_id"),
    )

    @property
    def is_global(self) -> bool:
        return self.student_id is None

    def update(self, count: Optional[int] = None, notify_parents: Optional[bool] = None) -> None:
        """Change the limit and/or the parent notification flag."""
        if count is not None:
            if count <= 0:
                raise InvalidArgumentError("count", message="Threshold count must be greater than 0", value=count)
            self.count = count
        if notify_parents is not None:
            self.notify_parents = notify_parents
        self.touch()

    def __repr__(self) -> str:
        return (
            f"<AlertThreshold(type={self.alert_type}, count={self.count}, "
            f"period={self.period}, student_id={self.student_id})>"
        )


class AttendanceAlert(TimestampModel):
    """A raised attendance alert with its lifecycle state."""

    __tablename__ = "attendance_alerts"

    student_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
    )
    threshold_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("alert_thresholds.id", ondelete="SET NULL"),
        nullable=True,
    )
    alert_type: Mapped[AlertType] = mapped_column(
        SQLEnum(AlertType, name="alert_type"),
        nullable=False,
    )
    count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Occurrences observed when the alert was last evaluated",
    )
    status: Mapped[AlertStatus] = mapped_column(
        SQLEnum(AlertStatus, name="alert_status"),
        nullable=False,
        default=AlertStatus.ACTIVE,
        index=True,
    )
    period: Mapped[AlertPeriod] = mapped_column(
        SQLEnum(AlertPeriod, name="alert_period"),
        nullable=False,
    )
    notification_sent: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    __table_args__ = (
        Index("idx_alert_student_status", "student_id", "status"),
        Index("idx_alert_student_type_period", "student_id", "alert_type", "period"),
    )

    @classmethod
    def create_new(
        cls,
        student_id: str,
        threshold_id: Optional[str],
        alert_type: AlertType,
        count: int,
        period: AlertPeriod,
    ) -> "AttendanceAlert":
        """Build a fresh ACTIVE alert."""
        return cls(
            student_id=student_id,
            threshold_id=threshold_id,
            alert_type=alert_type,
            count=count,
            status=AlertStatus.ACTIVE,
            period=period,
            notification_sent=False,
        )

    @property
    def is_active(self) -> bool:
        return self.status == AlertStatus.ACTIVE

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self.status]

    def can_transition_to(self, target: AlertStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def _transition(self, target: AlertStatus) -> None:
        if not self.can_transition_to(target):
            raise InvalidAlertTransitionError(self.id, self.status.value, target.value)
        self.status = target
        self.touch()

    def dismiss(self) -> None:
        self._transition(AlertStatus.DISMISSED)

    def mark_parent_notified(self) -> None:
        self._transition(AlertStatus.PARENT_NOTIFIED)
        self.notification_sent = True

    def resolve(self) -> None:
        self._transition(AlertStatus.RESOLVED)

    def update_count(self, new_count: int) -> None:
        """Record a new occurrence count without changing the state."""
        if new_count < 0:
            raise InvalidArgumentError("new_count", message="Alert count cannot be negative", value=new_count)
        self.count = new_count
        self.touch()

    def __repr__(self) -> str:
        return (
            f"<AttendanceAlert(id={self.id}, student_id={self.student_id}, "
            f"type={self.alert_type}, status={self.status})>"
        )
