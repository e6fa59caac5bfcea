# attendance_app/utils/date_utils.py
"""
Calendar helpers shared by the attendance analytics engine.

Notes:
- Dates travel through the engine as ISO `YYYY-MM-DD` strings; these helpers
  are the only place they are parsed.
- Weeks start on Monday. Weekend means Saturday or Sunday.
- "Today" is always the UTC calendar date.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Tuple, Union

from attendance_app.core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

UTC = timezone.utc

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DateLike = Union[str, date]


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()


def is_iso_date(value: object) -> bool:
    """Return True if value is a `YYYY-MM-DD` string naming a real calendar date."""
    if not isinstance(value, str) or not ISO_DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_iso_date(value: DateLike, field: str = "date_iso") -> date:
    """
    Parse an ISO `YYYY-MM-DD` date.

    `date` objects pass through unchanged (datetimes are reduced to their
    date). Anything else that is not a real calendar date raises
    InvalidArgumentError naming `field`.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, str):
        candidate = value.strip()
        if ISO_DATE_PATTERN.match(candidate):
            try:
                return date.fromisoformat(candidate)
            except ValueError as e:
                logger.debug(f"Rejected {field}={value!r}: {e}")

    raise InvalidArgumentError(
        field,
        message=f"'{field}' must be a calendar date in YYYY-MM-DD format, got {value!r}",
        value=value,
    )


def format_iso_date(d: date) -> str:
    """Format a date as `YYYY-MM-DD`."""
    return d.isoformat()


def is_weekend(d: date) -> bool:
    """Return True if the date is a Saturday or Sunday."""
    return d.weekday() >= 5


def week_start(d: date) -> date:
    """Return the Monday on or before `d`."""
    return d - timedelta(days=d.weekday())


def month_start(d: date) -> date:
    """Return the first day of the month containing `d`."""
    return d.replace(day=1)


def year_range(year: int) -> Tuple[date, date]:
    """Return (Jan 1, Dec 31) of a given year."""
    if not isinstance(year, int) or isinstance(year, bool) or not (1 <= year <= 9999):
        raise InvalidArgumentError(
            "year", message=f"'year' must be an integer between 1 and 9999, got {year!r}", value=year
        )
    return date(year, 1, 1), date(year, 12, 31)


def trailing_window(end: date, days: int) -> Tuple[date, date]:
    """
    Return the `days`-long window ending at `end`, inclusive of both ends.

    A 30-day window ending on D starts on D-29. Windows reaching back past
    the first representable date start at `date.min`.
    """
    if days < 1:
        raise InvalidArgumentError("days", message=f"'days' must be at least 1, got {days}", value=days)
    span = min(days - 1, (end - date.min).days)
    return end - timedelta(days=span), end


def daterange(start: date, end: date) -> Iterator[date]:
    """
    Yield all dates from start to end inclusive.
    If start > end, yields nothing.
    """
    if start > end:
        return

    delta = (end - start).days
    for i in range(delta + 1):
        yield start + timedelta(days=i)


__all__ = [
    "UTC",
    "DateLike",
    "now_utc",
    "today_utc",
    "is_iso_date",
    "parse_iso_date",
    "format_iso_date",
    "is_weekend",
    "week_start",
    "month_start",
    "year_range",
    "trailing_window",
    "daterange",
]
