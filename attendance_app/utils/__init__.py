"""
Utility helpers for the attendance analytics application.
"""

from attendance_app.utils.date_utils import (
    daterange,
    is_iso_date,
    is_weekend,
    month_start,
    parse_iso_date,
    today_utc,
    trailing_window,
    week_start,
    year_range,
)

__all__ = [
    "daterange",
    "is_iso_date",
    "is_weekend",
    "month_start",
    "parse_iso_date",
    "today_utc",
    "trailing_window",
    "week_start",
    "year_range",
]
