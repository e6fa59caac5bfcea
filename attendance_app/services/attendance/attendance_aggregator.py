# attendance_app/services/attendance/attendance_aggregator.py
"""
Time-bucketed attendance history.

Turns one student's records into sparse DAILY, WEEKLY or MONTHLY buckets:

- ranges are inclusive on both ends;
- records on off days are dropped before counting, whatever their status;
- weekly buckets are keyed by the Monday on or before the date, monthly
  buckets by the first of the month;
- buckets keyed before the start date's own bucket key are discarded;
- empty buckets are never emitted and the result is sorted by key.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional

from attendance_app.config.settings import get_settings
from attendance_app.core.exceptions import InvalidArgumentError
from attendance_app.repositories.attendance.protocols import RecordStore
from attendance_app.schemas.attendance.attendance_record import AttendanceRecord
from attendance_app.schemas.attendance.attendance_report import Bucket
from attendance_app.schemas.common.enums import AttendanceStatus, Timeframe
from attendance_app.services.attendance.off_day_oracle import OffDayOracle
from attendance_app.utils.date_utils import (
    DateLike,
    month_start,
    parse_iso_date,
    today_utc,
    trailing_window,
    week_start,
)

logger = logging.getLogger(__name__)

__all__ = [
    "AttendanceAggregator",
    "STATUS_COUNTER",
    "empty_counters",
    "tally",
    "parse_timeframe",
    "bucket_key",
]

STATUS_COUNTER: Dict[AttendanceStatus, str] = {
    AttendanceStatus.PRESENT: "present",
    AttendanceStatus.LATE: "late",
    AttendanceStatus.ABSENT: "absent",
    AttendanceStatus.EXCUSED: "excused",
}

ALLOWED_TIMEFRAMES = [t.value for t in Timeframe]


def empty_counters() -> Dict[str, int]:
    return {"present": 0, "late": 0, "absent": 0, "excused": 0, "early_dismissal": 0}


def tally(counters: Dict[str, int], record: AttendanceRecord) -> None:
    """Add one record to a counter dict. Early dismissal counts regardless of status."""
    counters[STATUS_COUNTER[record.status]] += 1
    if record.early_dismissal:
        counters["early_dismissal"] += 1


def parse_timeframe(value: Timeframe | str) -> Timeframe:
    """Accept a Timeframe or its name (any case); anything else is rejected."""
    if isinstance(value, Timeframe):
        return value
    if isinstance(value, str):
        try:
            return Timeframe(value.strip().upper())
        except ValueError:
            pass
    raise InvalidArgumentError("timeframe", value=value, allowed=ALLOWED_TIMEFRAMES)


def bucket_key(day: date, timeframe: Timeframe) -> date:
    """First date of the bucket containing `day`."""
    if timeframe is Timeframe.WEEKLY:
        return week_start(day)
    if timeframe is Timeframe.MONTHLY:
        return month_start(day)
    return day


class AttendanceAggregator:
    """
    Buckets a student's attendance into daily, weekly or monthly windows.

    Each call reads a fresh snapshot from the record store; nothing is
    cached between calls.
    """

    def __init__(
        self,
        record_store: RecordStore,
        oracle: OffDayOracle,
        today: Optional[Callable[[], date]] = None,
        default_history_days: Optional[int] = None,
    ) -> None:
        self._record_store = record_store
        self._oracle = oracle
        self._today_fn = today or today_utc
        if default_history_days is None:
            default_history_days = get_settings().DEFAULT_HISTORY_DAYS
        self.default_history_days = default_history_days
        if self.default_history_days < 1:
            raise InvalidArgumentError(
                "default_history_days",
                message="default_history_days must be at least 1",
                value=self.default_history_days,
            )

    @property
    def oracle(self) -> OffDayOracle:
        return self._oracle

    def _today(self) -> date:
        return self._today_fn()

    def resolve_range(
        self, start_iso: Optional[DateLike] = None, end_iso: Optional[DateLike] = None
    ) -> tuple[date, date]:
        """
        Turn optional range bounds into dates.

        A missing end means today; a missing start means the default
        history length ending at `end`.
        """
        end = parse_iso_date(end_iso, "end_iso") if end_iso is not None else self._today()
        if start_iso is not None:
            start = parse_iso_date(start_iso, "start_iso")
        else:
            start, _ = trailing_window(end, self.default_history_days)
        return start, end

    def get_history_by_timeframe(
        self,
        student_id: str,
        timeframe: Timeframe | str,
        start_iso: Optional[DateLike] = None,
        end_iso: Optional[DateLike] = None,
    ) -> List[Bucket]:
        """
        Bucketed counters for one student over [start_iso, end_iso].

        Raises:
            InvalidArgumentError: unknown timeframe or malformed date
        """
        frame = parse_timeframe(timeframe)
        start, end = self.resolve_range(start_iso, end_iso)

        logger.debug(
            f"operation=get_history_by_timeframe student_id={student_id} "
            f"timeframe={frame.value} start={start} end={end}"
        )

        if start > end:
            return []

        records = self._record_store.find_by_student_and_date_range(
            student_id, start.isoformat(), end.isoformat()
        )
        buckets = self._bucket(records, student_id, frame, start, end)

        logger.debug(
            f"operation=get_history_by_timeframe student_id={student_id} buckets={len(buckets)}"
        )
        return buckets

    def _bucket(
        self,
        records: Iterable[AttendanceRecord],
        student_id: str,
        frame: Timeframe,
        start: date,
        end: date,
    ) -> List[Bucket]:
        counters_by_key: Dict[date, Dict[str, int]] = {}
        off_days: Dict[date, bool] = {}

        for record in records:
            day = record.date
            if record.student_id != student_id or not (start <= day <= end):
                continue
            if day not in off_days:
                off_days[day] = self._oracle.is_off_day(day)
            if off_days[day]:
                continue

            key = bucket_key(day, frame)
            tally(counters_by_key.setdefault(key, empty_counters()), record)

        earliest_key = bucket_key(start, frame)
        return [
            Bucket(bucket_start_iso=key.isoformat(), **counters)
            for key, counters in sorted(counters_by_key.items())
            if key >= earliest_key and any(counters.values())
        ]
