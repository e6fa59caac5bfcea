# attendance_app/services/attendance/year_to_date_summarizer.py
from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, Optional

from attendance_app.repositories.attendance.protocols import RecordStore
from attendance_app.schemas.attendance.attendance_report import Summary
from attendance_app.services.attendance.attendance_aggregator import empty_counters, tally
from attendance_app.services.attendance.off_day_oracle import OffDayOracle
from attendance_app.utils.date_utils import today_utc, year_range

logger = logging.getLogger(__name__)

__all__ = ["YearToDateSummarizer"]


class YearToDateSummarizer:
    """
    Cumulative attendance counters for one student over a year.

    The current year runs from Jan 1 through today; any other year is
    summarized in full. Off days are excluded exactly as in the
    aggregator.
    """

    def __init__(
        self,
        record_store: RecordStore,
        oracle: OffDayOracle,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self._record_store = record_store
        self._oracle = oracle
        self._today_fn = today or today_utc

    def _today(self) -> date:
        return self._today_fn()

    def year_to_date_range(self, year: Optional[int] = None) -> tuple[date, date]:
        today = self._today()
        if year is None:
            year = today.year
        start, end = year_range(year)
        if year == today.year:
            end = today
        return start, end

    def get_year_to_date_summary(self, student_id: str, year: Optional[int] = None) -> Summary:
        """
        Summary of present/late/absent/excused/early-dismissal counts.

        A student with no records gets an all-zero summary.

        Raises:
            InvalidArgumentError: year outside 1..9999
        """
        start, end = self.year_to_date_range(year)
        logger.debug(
            f"operation=get_year_to_date_summary student_id={student_id} start={start} end={end}"
        )

        counters: Dict[str, int] = empty_counters()
        off_days: Dict[date, bool] = {}

        records = self._record_store.find_by_student_and_date_range(
            student_id, start.isoformat(), end.isoformat()
        )
        for record in records:
            day = record.date
            if record.student_id != student_id or not (start <= day <= end):
                continue
            if day not in off_days:
                off_days[day] = self._oracle.is_off_day(day)
            if not off_days[day]:
                tally(counters, record)

        return Summary(**counters)
