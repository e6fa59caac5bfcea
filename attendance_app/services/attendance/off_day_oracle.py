# attendance_app/services/attendance/off_day_oracle.py
"""
Decides which calendar dates count toward attendance statistics.

Two strategies sit behind the same interface and are never mixed:

- CALENDAR (default): a date is off when it is a Saturday or Sunday, or
  when a planned all-student day off exists for it.
- ROSTER_EXCUSED: school is inferred to be out when every rostered student
  has an EXCUSED record that day. Weekends count as off unless someone has
  a non-EXCUSED record. An empty roster never yields an off day.
"""

from __future__ import annotations

import logging
from typing import Optional

from attendance_app.config.settings import Settings, get_settings
from attendance_app.core.exceptions import ConfigurationError, InvalidArgumentError
from attendance_app.repositories.attendance.protocols import DayOffStore, RecordStore, StudentRoster
from attendance_app.schemas.common.enums import AttendanceStatus, OffDayStrategy
from attendance_app.utils.date_utils import DateLike, is_weekend, parse_iso_date

logger = logging.getLogger(__name__)

__all__ = ["OffDayOracle"]


class OffDayOracle:
    """
    Off-day lookup for a single strategy.

    Holds no state of its own; every answer is read from the stores at
    call time.
    """

    def __init__(
        self,
        day_off_store: DayOffStore,
        strategy: OffDayStrategy | str = OffDayStrategy.CALENDAR,
        record_store: Optional[RecordStore] = None,
        roster: Optional[StudentRoster] = None,
    ) -> None:
        try:
            self.strategy = OffDayStrategy(strategy)
        except ValueError as e:
            raise InvalidArgumentError(
                "strategy", value=strategy, allowed=[s.value for s in OffDayStrategy]
            ) from e

        if self.strategy is OffDayStrategy.ROSTER_EXCUSED and (record_store is None or roster is None):
            raise ConfigurationError(
                "The roster_excused strategy needs a record store and a student roster",
                config_key="OFF_DAY_STRATEGY",
                config_value=self.strategy.value,
            )

        self._day_off_store = day_off_store
        self._record_store = record_store
        self._roster = roster

    @classmethod
    def from_settings(
        cls,
        day_off_store: DayOffStore,
        record_store: Optional[RecordStore] = None,
        roster: Optional[StudentRoster] = None,
        settings: Optional[Settings] = None,
    ) -> "OffDayOracle":
        """Build an oracle using the configured OFF_DAY_STRATEGY."""
        settings = settings or get_settings()
        logger.debug(f"Off-day strategy from settings: {settings.OFF_DAY_STRATEGY}")
        return cls(
            day_off_store,
            strategy=settings.OFF_DAY_STRATEGY,
            record_store=record_store,
            roster=roster,
        )

    # ------------------------------------------------------------------ #
    # Calendar predicates (same meaning under every strategy)
    # ------------------------------------------------------------------ #
    def is_weekend(self, date_iso: DateLike) -> bool:
        """True if the date falls on a Saturday or Sunday."""
        return is_weekend(parse_iso_date(date_iso, "date_iso"))

    def is_planned_day_off(self, date_iso: DateLike) -> bool:
        """True if a planned all-student day off exists for exactly this date."""
        day = parse_iso_date(date_iso, "date_iso")
        return self._day_off_store.has_day_off(day.isoformat())

    # ------------------------------------------------------------------ #
    # Off-day decision
    # ------------------------------------------------------------------ #
    def is_off_day(self, date_iso: DateLike) -> bool:
        """True if the date must be left out of every bucket and summary."""
        day = parse_iso_date(date_iso, "date_iso")
        if self.strategy is OffDayStrategy.ROSTER_EXCUSED:
            return self._is_roster_excused(day.isoformat(), is_weekend(day))
        return is_weekend(day) or self._day_off_store.has_day_off(day.isoformat())

    def _is_roster_excused(self, day_iso: str, weekend: bool) -> bool:
        student_ids = self._roster.all_student_ids()
        if not student_ids:
            return False

        records = self._record_store.find_by_date(day_iso)

        if weekend:
            return all(r.status == AttendanceStatus.EXCUSED for r in records)

        excused = {r.student_id for r in records if r.status == AttendanceStatus.EXCUSED}
        return all(student_id in excused for student_id in student_ids)
