# attendance_app/services/attendance/threshold_evaluator.py
"""
Chronic-absence threshold checks.

Short-term counts come from the trailing 30-day DAILY window ending on the
as-of date (both ends included); cumulative counts come from the current
year-to-date summary. A rule breaches when the actual count is greater than
or equal to its threshold. Reasons are reported in a fixed order:
absences30, lates30, absences_total, lates_total.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from attendance_app.core.exceptions import InvalidArgumentError
from attendance_app.schemas.attendance.attendance_alert import AlertNotification, AlertResult, AlertRules
from attendance_app.schemas.common.enums import Timeframe
from attendance_app.services.attendance.attendance_aggregator import AttendanceAggregator
from attendance_app.services.attendance.notifier import Notifier
from attendance_app.services.attendance.year_to_date_summarizer import YearToDateSummarizer
from attendance_app.utils.date_utils import DateLike, parse_iso_date, trailing_window

logger = logging.getLogger(__name__)

__all__ = ["ThresholdEvaluator", "ROLLING_WINDOW_DAYS"]

ROLLING_WINDOW_DAYS = 30

RulesLike = Union[AlertRules, Mapping[str, Any], None]


def _coerce_rules(rules: RulesLike) -> AlertRules:
    if rules is None:
        return AlertRules()
    if isinstance(rules, AlertRules):
        return rules
    try:
        return AlertRules.model_validate(dict(rules))
    except (PydanticValidationError, TypeError, ValueError) as e:
        raise InvalidArgumentError(
            "rules",
            message=f"Invalid alert rules: {e}",
            value=rules,
        ) from e


class ThresholdEvaluator:
    """Compares a student's attendance counts against AlertRules."""

    def __init__(
        self,
        aggregator: AttendanceAggregator,
        summarizer: YearToDateSummarizer,
    ) -> None:
        self._aggregator = aggregator
        self._summarizer = summarizer

    def rolling_window_counts(self, student_id: str, as_of: DateLike) -> Tuple[int, int]:
        """(absences, lates) over the 30 days ending on `as_of`, inclusive."""
        end = parse_iso_date(as_of, "as_of_iso")
        start, end = trailing_window(end, ROLLING_WINDOW_DAYS)
        buckets = self._aggregator.get_history_by_timeframe(
            student_id, Timeframe.DAILY, start.isoformat(), end.isoformat()
        )
        return sum(b.absent for b in buckets), sum(b.late for b in buckets)

    def cumulative_counts(self, student_id: str) -> Tuple[int, int]:
        """(absences, lates) for the current year to date."""
        summary = self._summarizer.get_year_to_date_summary(student_id)
        return summary.absent, summary.late

    def check_thresholds(self, student_id: str, as_of_iso: DateLike, rules: RulesLike) -> AlertResult:
        """
        Evaluate every configured rule for one student.

        Raises:
            InvalidArgumentError: malformed as-of date or invalid rules
        """
        as_of: date = parse_iso_date(as_of_iso, "as_of_iso")
        rules = _coerce_rules(rules)

        absences30, lates30 = self.rolling_window_counts(student_id, as_of)
        absences_total, lates_total = self.cumulative_counts(student_id)

        checks = [
            (rules.absences30, absences30, "absences in last 30 days"),
            (rules.lates30, lates30, "lates in last 30 days"),
            (rules.absences_total, absences_total, "total absences"),
            (rules.lates_total, lates_total, "total lates"),
        ]

        reasons: List[str] = [
            f"{label} ({actual}) >= threshold ({threshold})"
            for threshold, actual, label in checks
            if threshold is not None and actual >= threshold
        ]

        logger.debug(
            f"operation=check_thresholds student_id={student_id} as_of={as_of} "
            f"absences30={absences30} lates30={lates30} "
            f"absences_total={absences_total} lates_total={lates_total} breaches={len(reasons)}"
        )
        return AlertResult(should_alert=bool(reasons), reasons=reasons)

    def notify_if_breached(
        self,
        student_id: str,
        as_of_iso: DateLike,
        rules: RulesLike,
        notifier: Notifier,
    ) -> AlertResult:
        """
        Run check_thresholds and send one notification when it alerts.

        Notifier errors propagate to the caller.
        """
        result = self.check_thresholds(student_id, as_of_iso, rules)
        if not result.should_alert:
            return result

        notification = AlertNotification(
            student_id=student_id,
            when_iso=parse_iso_date(as_of_iso, "as_of_iso").isoformat(),
            reasons=list(result.reasons),
        )
        try:
            notifier.send(notification)
        except Exception as e:
            logger.error(
                f"operation=notify_if_breached student_id={student_id} notifier failed: {str(e)}",
                exc_info=True,
            )
            raise

        logger.info(
            f"operation=notify_if_breached student_id={student_id} reasons={len(result.reasons)}",
            extra={"student_id": student_id},
        )
        return result
