# --- File: attendance_app/schemas/attendance/attendance_alert.py ---
"""
Attendance alert schemas.

Covers the stateless threshold contract (rules in, result out), the
notification payload handed to a Notifier, and the inputs and outputs of
the persisted alert workflow.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator

from attendance_app.schemas.common.base import BaseFilterSchema, BaseSchema, FrozenSchema
from attendance_app.schemas.common.enums import AlertPeriod, AlertStatus, AlertType

__all__ = [
    "AlertRules",
    "AlertResult",
    "AlertNotification",
    "AlertThresholdCreate",
    "AlertFilters",
    "BatchAlertResult",
]


class AlertRules(FrozenSchema):
    """
    Optional count thresholds.

    A rule left as None is not evaluated.
    """

    absences30: Optional[int] = Field(
        None,
        ge=0,
        description="Absences allowed in the trailing 30 days before alerting",
    )
    lates30: Optional[int] = Field(
        None,
        ge=0,
        description="Lates allowed in the trailing 30 days before alerting",
    )
    absences_total: Optional[int] = Field(
        None,
        ge=0,
        alias="absencesTotal",
        description="Year-to-date absences before alerting",
    )
    lates_total: Optional[int] = Field(
        None,
        ge=0,
        alias="latesTotal",
        description="Year-to-date lates before alerting",
    )


class AlertResult(FrozenSchema):
    """Outcome of a threshold check."""

    should_alert: bool = Field(
        ...,
        alias="shouldAlert",
        description="True when at least one rule was breached",
    )
    reasons: List[str] = Field(
        default_factory=list,
        description="Human-readable breach descriptions in rule order",
    )


class AlertNotification(FrozenSchema):
    """Payload sent to a Notifier when a student breaches a threshold."""

    student_id: str = Field(..., alias="studentId", description="Student identifier")
    when_iso: str = Field(..., alias="whenISO", description="As-of date of the check")
    reasons: List[str] = Field(default_factory=list, description="Breach descriptions")


class AlertThresholdCreate(BaseSchema):
    """Threshold settings submitted for validation and storage."""

    alert_type: AlertType = Field(..., alias="type", description="Monitored attendance issue")
    count: int = Field(..., description="Occurrences that trigger an alert")
    period: AlertPeriod = Field(..., description="Evaluation window")
    student_id: Optional[str] = Field(
        None,
        alias="studentId",
        description="Student the threshold applies to; None for every student",
    )
    notify_parents: bool = Field(
        default=False,
        alias="notifyParents",
        description="Send a parent notification when the alert fires",
    )

    @field_validator("student_id", mode="before")
    @classmethod
    def blank_student_is_global(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class AlertFilters(BaseFilterSchema):
    """Filters for listing persisted alerts."""

    student_id: Optional[str] = Field(None, alias="studentId")
    statuses: Optional[List[AlertStatus]] = Field(
        None,
        description="Alert states to include; None means ACTIVE only",
    )
    alert_types: Optional[List[AlertType]] = Field(None, alias="types")
    period: Optional[AlertPeriod] = None


class BatchAlertResult(BaseSchema):
    """Counters from one automatic alert processing run."""

    processed: int = Field(default=0, ge=0, description="Alerts created or updated")
    triggered: int = Field(default=0, ge=0, description="Alerts newly created")
    notifications_sent: int = Field(default=0, ge=0, description="Parent notifications delivered")
    errors: List[str] = Field(default_factory=list, description="Failures collected during the run")
