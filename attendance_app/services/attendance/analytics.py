# attendance_app/services/attendance/analytics.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional

from attendance_app.config.settings import Settings, get_settings
from attendance_app.repositories.attendance.protocols import DayOffStore, RecordStore, StudentRoster
from attendance_app.schemas.attendance.attendance_alert import AlertResult
from attendance_app.schemas.attendance.attendance_report import Bucket, Summary
from attendance_app.schemas.common.enums import Timeframe
from attendance_app.services.attendance.attendance_aggregator import AttendanceAggregator
from attendance_app.services.attendance.notifier import Notifier
from attendance_app.services.attendance.off_day_oracle import OffDayOracle
from attendance_app.services.attendance.threshold_evaluator import RulesLike, ThresholdEvaluator
from attendance_app.services.attendance.year_to_date_summarizer import YearToDateSummarizer
from attendance_app.utils.date_utils import DateLike, today_utc

logger = logging.getLogger(__name__)

__all__ = ["AttendanceAnalytics"]


@dataclass(frozen=True)
class AttendanceAnalytics:
    """
    The wired analytics engine.

    Bundles the oracle, aggregator, summarizer and evaluator built over the
    same stores, strategy and clock, and exposes their public operations.
    """

    oracle: OffDayOracle
    aggregator: AttendanceAggregator
    summarizer: YearToDateSummarizer
    evaluator: ThresholdEvaluator

    @classmethod
    def build(
        cls,
        record_store: RecordStore,
        day_off_store: DayOffStore,
        roster: Optional[StudentRoster] = None,
        settings: Optional[Settings] = None,
        today: Optional[Callable[[], date]] = None,
    ) -> "AttendanceAnalytics":
        settings = settings or get_settings()
        today = today or today_utc

        oracle = OffDayOracle.from_settings(
            day_off_store, record_store=record_store, roster=roster, settings=settings
        )
        aggregator = AttendanceAggregator(
            record_store, oracle, today=today, default_history_days=settings.DEFAULT_HISTORY_DAYS
        )
        summarizer = YearToDateSummarizer(record_store, oracle, today=today)
        evaluator = ThresholdEvaluator(aggregator, summarizer)

        logger.debug(f"Analytics engine built with off-day strategy {oracle.strategy.value}")
        return cls(oracle=oracle, aggregator=aggregator, summarizer=summarizer, evaluator=evaluator)

    def is_off_day(self, date_iso: DateLike) -> bool:
        return self.oracle.is_off_day(date_iso)

    def get_history_by_timeframe(
        self,
        student_id: str,
        timeframe: Timeframe | str,
        start_iso: Optional[DateLike] = None,
        end_iso: Optional[DateLike] = None,
    ) -> List[Bucket]:
        return self.aggregator.get_history_by_timeframe(student_id, timeframe, start_iso, end_iso)

    def get_year_to_date_summary(self, student_id: str, year: Optional[int] = None) -> Summary:
        return self.summarizer.get_year_to_date_summary(student_id, year)

    def check_thresholds(self, student_id: str, as_of_iso: DateLike, rules: RulesLike) -> AlertResult:
        return self.evaluator.check_thresholds(student_id, as_of_iso, rules)

    def notify_if_breached(
        self, student_id: str, as_of_iso: DateLike, rules: RulesLike, notifier: Notifier
    ) -> AlertResult:
        return self.evaluator.notify_if_breached(student_id, as_of_iso, rules, notifier)
