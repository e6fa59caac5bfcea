"""
Notifier collaborator interface.

Delivery channels (email, SMS) live outside this package; anything with a
`send(notification)` method can be plugged in.
"""

import logging
from typing import Protocol, runtime_checkable

from attendance_app.schemas.attendance.attendance_alert import AlertNotification

logger = logging.getLogger(__name__)

__all__ = ["Notifier", "LoggingNotifier"]


@runtime_checkable
class Notifier(Protocol):
    def send(self, notification: AlertNotification) -> None:
        ...


class LoggingNotifier:
    """Writes each notification to the log instead of delivering it."""

    def __init__(self, log: logging.Logger = logger) -> None:
        self._log = log

    def send(self, notification: AlertNotification) -> None:
        self._log.warning(
            f"Attendance alert for student {notification.student_id} as of {notification.when_iso}: "
            + "; ".join(notification.reasons),
            extra={"student_id": notification.student_id},
        )
