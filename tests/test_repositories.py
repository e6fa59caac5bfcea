from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError as PydanticValidationError

from attendance_app.core.exceptions import InvalidArgumentError, ResourceNotFoundError
from attendance_app.models.attendance.attendance_record import AttendanceRecordModel
from attendance_app.repositories.attendance.attendance_record_repository import AttendanceRecordRepository
from attendance_app.repositories.attendance.in_memory import (
    InMemoryDayOffStore,
    InMemoryRecordStore,
    InMemoryStudentRoster,
)
from attendance_app.repositories.attendance.protocols import DayOffStore, RecordStore, StudentRoster
from attendance_app.repositories.attendance.schedule_repository import ScheduledDayOffRepository
from attendance_app.schemas.attendance.attendance_record import PlannedDayOff
from attendance_app.schemas.common.enums import AttendanceStatus, DayOffReason, Timeframe
from attendance_app.services.attendance.attendance_aggregator import AttendanceAggregator
from attendance_app.services.attendance.off_day_oracle import OffDayOracle
from attendance_app.services.attendance.year_to_date_summarizer import YearToDateSummarizer

P = AttendanceStatus.PRESENT
A = AttendanceStatus.ABSENT
L = AttendanceStatus.LATE


@pytest.fixture
def record_repo(db_session):
    return AttendanceRecordRepository(db_session)


@pytest.fixture
def day_off_repo(db_session):
    return ScheduledDayOffRepository(db_session)


def test_stores_satisfy_protocols(record_repo, day_off_repo):
    assert isinstance(record_repo, RecordStore)
    assert isinstance(day_off_repo, DayOffStore)
    assert isinstance(InMemoryRecordStore(), RecordStore)
    assert isinstance(InMemoryDayOffStore(), DayOffStore)
    assert isinstance(InMemoryStudentRoster(), StudentRoster)


# ---------------------------------------------------------------------------
# In-memory stores
# ---------------------------------------------------------------------------

def test_in_memory_save_replaces_same_student_and_day(make_record):
    store = InMemoryRecordStore()
    store.save_attendance(make_record("2025-09-01", A))
    store.save_attendance(make_record("2025-09-01", P, early=True))

    assert len(store) == 1
    assert store.find_attendance_by("s1", "2025-09-01").status is P


def test_in_memory_range_is_inclusive_and_per_student(make_record):
    store = InMemoryRecordStore([
        make_record("2025-08-31", P),
        make_record("2025-09-01", A),
        make_record("2025-09-03", L),
        make_record("2025-09-04", P),
        make_record("2025-09-02", A, student_id="s2"),
    ])

    found = store.find_by_student_and_date_range("s1", "2025-09-01", "2025-09-03")
    assert [r.date_iso for r in found] == ["2025-09-01", "2025-09-03"]


def test_in_memory_day_off_listing():
    store = InMemoryDayOffStore([
        PlannedDayOff(date_iso="2025-12-25", reason=DayOffReason.HOLIDAY),
        PlannedDayOff(date_iso="2025-11-27", reason=DayOffReason.HOLIDAY),
    ])

    assert store.has_day_off("2025-12-25")
    assert not store.has_day_off("2025-12-24")
    assert [d.date_iso for d in store.all_days_off()] == ["2025-11-27", "2025-12-25"]
    assert [d.date_iso for d in store.list_days_off_in_range("2025-12-01", "2025-12-31")] == ["2025-12-25"]


def test_roster_membership():
    roster = InMemoryStudentRoster(["s2", "s1"])
    roster.add_student("s3")
    assert roster.has_student("s3")
    assert not roster.has_student("s9")
    assert sorted(roster.all_student_ids()) == ["s1", "s2", "s3"]


# ---------------------------------------------------------------------------
# SQL record repository
# ---------------------------------------------------------------------------

def test_sql_upsert_keeps_one_row(record_repo, make_record):
    record_repo.save_attendance(make_record("2025-09-01", A))
    record_repo.save_attendance(make_record("2025-09-01", L, early=True))

    assert len(record_repo.find_all()) == 1
    stored = record_repo.find_attendance_by("s1", "2025-09-01")
    assert stored.status is L
    assert stored.early_dismissal is True


def test_sql_reads_return_frozen_snapshots(record_repo, make_record):
    record_repo.save_attendance(make_record("2025-09-01", A))
    snapshot = record_repo.find_attendance_by("s1", "2025-09-01")

    with pytest.raises(PydanticValidationError):
        snapshot.status = P

    assert record_repo.find_attendance_by("s1", "2025-09-01").status is A


def test_sql_range_and_day_queries(record_repo, make_record):
    for record in [
        make_record("2025-09-03", L),
        make_record("2025-09-01", A),
        make_record("2025-09-05", P),
        make_record("2025-09-03", P, student_id="s2"),
    ]:
        record_repo.save_attendance(record)

    in_range = record_repo.find_by_student_and_date_range("s1", "2025-09-01", "2025-09-03")
    assert [r.date_iso for r in in_range] == ["2025-09-01", "2025-09-03"]

    on_day = record_repo.find_by_date("2025-09-03")
    assert [(r.student_id, r.status) for r in on_day] == [("s1", L), ("s2", P)]

    assert len(record_repo.all_attendance()) == 4
    assert record_repo.find_attendance_by("s1", "2025-09-02") is None


def test_sql_rejects_malformed_range(record_repo):
    with pytest.raises(InvalidArgumentError) as exc:
        record_repo.find_by_student_and_date_range("s1", "2025/09/01", "2025-09-03")
    assert exc.value.field == "start_iso"


def test_get_by_id_raises_for_missing_row(record_repo):
    with pytest.raises(ResourceNotFoundError):
        record_repo.get_by_id("missing")


def test_model_round_trips_to_schema(make_record):
    record = make_record("2025-09-02", L, early=True)
    row = AttendanceRecordModel.from_schema(record)

    assert row.date == date(2025, 9, 2)
    assert row.to_schema() == record


# ---------------------------------------------------------------------------
# SQL day-off repository
# ---------------------------------------------------------------------------

def test_sql_day_off_replaces_reason(day_off_repo):
    day_off_repo.save_day_off(PlannedDayOff(date_iso="2025-10-10", reason=DayOffReason.OTHER))
    saved = day_off_repo.save_day_off(PlannedDayOff(date_iso="2025-10-10", reason=DayOffReason.PROF_DEV))

    assert saved.reason is DayOffReason.PROF_DEV
    assert [(d.date_iso, d.reason) for d in day_off_repo.all_days_off()] == [
        ("2025-10-10", DayOffReason.PROF_DEV)
    ]
    assert day_off_repo.has_day_off("2025-10-10")
    assert not day_off_repo.has_day_off(date(2025, 10, 11))


def test_sql_day_off_range(day_off_repo):
    for day in ("2025-12-25", "2025-11-27", "2026-01-01"):
        day_off_repo.save_day_off(PlannedDayOff(date_iso=day, reason=DayOffReason.HOLIDAY))

    days = day_off_repo.list_days_off_in_range("2025-11-01", "2025-12-31")
    assert [d.date_iso for d in days] == ["2025-11-27", "2025-12-25"]


# ---------------------------------------------------------------------------
# Analytics over the SQL stores
# ---------------------------------------------------------------------------

def test_engine_gives_same_answers_over_sql_stores(
    record_repo, day_off_repo, reference_records, analytics, fixed_today
):
    for record in reference_records:
        record_repo.save_attendance(record)

    oracle = OffDayOracle(day_off_repo)
    aggregator = AttendanceAggregator(record_repo, oracle, today=fixed_today, default_history_days=30)
    summarizer = YearToDateSummarizer(record_repo, oracle, today=fixed_today)

    for timeframe in Timeframe:
        assert aggregator.get_history_by_timeframe("s1", timeframe, "2025-09-01", "2025-09-10") == \
            analytics.get_history_by_timeframe("s1", timeframe, "2025-09-01", "2025-09-10")
    assert summarizer.get_year_to_date_summary("s1") == analytics.get_year_to_date_summary("s1")


def test_sql_planned_day_off_drops_the_day(record_repo, day_off_repo, make_record, fixed_today):
    record_repo.save_attendance(make_record("2025-09-03", A))
    record_repo.save_attendance(make_record("2025-09-04", L))
    day_off_repo.save_day_off(PlannedDayOff(date_iso="2025-09-03", reason=DayOffReason.REPORT_CARD))

    aggregator = AttendanceAggregator(
        record_repo, OffDayOracle(day_off_repo), today=fixed_today, default_history_days=30
    )
    buckets = aggregator.get_history_by_timeframe("s1", Timeframe.DAILY, "2025-09-01", "2025-09-05")

    assert [(b.bucket_start_iso, b.absent, b.late) for b in buckets] == [("2025-09-04", 0, 1)]
