from __future__ import annotations

from datetime import date

import pytest

from attendance_app.config.settings import Settings
from attendance_app.core.exceptions import ConfigurationError, InvalidArgumentError
from attendance_app.repositories.attendance.in_memory import (
    InMemoryDayOffStore,
    InMemoryRecordStore,
    InMemoryStudentRoster,
)
from attendance_app.schemas.attendance.attendance_record import PlannedDayOff
from attendance_app.schemas.common.enums import AttendanceStatus, DayOffReason, OffDayStrategy
from attendance_app.services.attendance.off_day_oracle import OffDayOracle


def test_weekend_detection():
    oracle = OffDayOracle(InMemoryDayOffStore())
    assert oracle.is_weekend("2025-09-06")  # Saturday
    assert oracle.is_weekend("2025-09-07")  # Sunday
    assert not oracle.is_weekend("2025-09-08")  # Monday
    assert not oracle.is_weekend("2025-09-05")  # Friday


def test_weekend_is_off_day_without_any_planned_entries():
    oracle = OffDayOracle(InMemoryDayOffStore())
    assert oracle.is_off_day("2025-09-06")
    assert not oracle.is_off_day("2025-09-04")


def test_planned_day_off_on_weekday():
    store = InMemoryDayOffStore([PlannedDayOff(date_iso="2025-09-03", reason=DayOffReason.HOLIDAY)])
    oracle = OffDayOracle(store)

    assert oracle.is_planned_day_off("2025-09-03")
    assert oracle.is_off_day("2025-09-03")
    assert not oracle.is_planned_day_off("2025-09-04")
    assert not oracle.is_off_day("2025-09-04")


def test_accepts_date_objects():
    oracle = OffDayOracle(InMemoryDayOffStore())
    assert oracle.is_off_day(date(2025, 9, 6))
    assert not oracle.is_off_day(date(2025, 9, 8))


@pytest.mark.parametrize("bad", ["2025-13-01", "2025-02-30", "not-a-date", "2025-9-1", ""])
def test_malformed_date_names_the_field(bad):
    oracle = OffDayOracle(InMemoryDayOffStore())
    with pytest.raises(InvalidArgumentError) as exc:
        oracle.is_off_day(bad)
    assert exc.value.field == "date_iso"


def test_unknown_strategy_is_rejected():
    with pytest.raises(InvalidArgumentError) as exc:
        OffDayOracle(InMemoryDayOffStore(), strategy="guesswork")
    assert exc.value.field == "strategy"
    assert exc.value.allowed == ["calendar", "roster_excused"]


def test_roster_strategy_requires_its_collaborators():
    with pytest.raises(ConfigurationError):
        OffDayOracle(InMemoryDayOffStore(), strategy=OffDayStrategy.ROSTER_EXCUSED)


def test_from_settings_picks_configured_strategy():
    settings = Settings(OFF_DAY_STRATEGY="roster_excused")
    oracle = OffDayOracle.from_settings(
        InMemoryDayOffStore(),
        record_store=InMemoryRecordStore(),
        roster=InMemoryStudentRoster(["s1"]),
        settings=settings,
    )
    assert oracle.strategy is OffDayStrategy.ROSTER_EXCUSED


# ---------------------------------------------------------------------------
# roster_excused strategy
# ---------------------------------------------------------------------------

def _roster_oracle(records, student_ids):
    return OffDayOracle(
        InMemoryDayOffStore(),
        strategy=OffDayStrategy.ROSTER_EXCUSED,
        record_store=InMemoryRecordStore(records),
        roster=InMemoryStudentRoster(student_ids),
    )


def test_roster_strategy_empty_roster_never_off(make_record):
    oracle = _roster_oracle([], [])
    assert not oracle.is_off_day("2025-09-06")  # even a Saturday
    assert not oracle.is_off_day("2025-09-08")


def test_roster_strategy_weekday_all_excused(make_record):
    records = [
        make_record("2025-09-08", AttendanceStatus.EXCUSED, student_id="s1"),
        make_record("2025-09-08", AttendanceStatus.EXCUSED, student_id="s2"),
    ]
    oracle = _roster_oracle(records, ["s1", "s2"])
    assert oracle.is_off_day("2025-09-08")


def test_roster_strategy_weekday_partially_excused(make_record):
    records = [
        make_record("2025-09-08", AttendanceStatus.EXCUSED, student_id="s1"),
        make_record("2025-09-08", AttendanceStatus.PRESENT, student_id="s2"),
    ]
    oracle = _roster_oracle(records, ["s1", "s2"])
    assert not oracle.is_off_day("2025-09-08")


def test_roster_strategy_weekday_missing_records(make_record):
    records = [make_record("2025-09-08", AttendanceStatus.EXCUSED, student_id="s1")]
    oracle = _roster_oracle(records, ["s1", "s2"])
    assert not oracle.is_off_day("2025-09-08")


def test_roster_strategy_weekend_without_attendance(make_record):
    oracle = _roster_oracle([], ["s1", "s2"])
    assert oracle.is_off_day("2025-09-06")


def test_roster_strategy_weekend_with_real_attendance(make_record):
    records = [make_record("2025-09-06", AttendanceStatus.PRESENT, student_id="s1")]
    oracle = _roster_oracle(records, ["s1", "s2"])
    assert not oracle.is_off_day("2025-09-06")


def test_roster_strategy_keeps_calendar_predicates(make_record):
    store = InMemoryDayOffStore([PlannedDayOff(date_iso="2025-09-08")])
    oracle = OffDayOracle(
        store,
        strategy=OffDayStrategy.ROSTER_EXCUSED,
        record_store=InMemoryRecordStore(),
        roster=InMemoryStudentRoster(["s1"]),
    )
    assert oracle.is_planned_day_off("2025-09-08")
    assert oracle.is_weekend("2025-09-06")
    # the planned entry is not consulted by the roster heuristic
    assert not oracle.is_off_day("2025-09-08")
