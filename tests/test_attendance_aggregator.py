from __future__ import annotations

from datetime import date

import pytest

from attendance_app.core.exceptions import InvalidArgumentError
from attendance_app.repositories.attendance.in_memory import InMemoryDayOffStore, InMemoryRecordStore
from attendance_app.schemas.attendance.attendance_record import PlannedDayOff
from attendance_app.schemas.common.enums import AttendanceStatus, Timeframe
from attendance_app.services.attendance.attendance_aggregator import AttendanceAggregator
from attendance_app.services.attendance.off_day_oracle import OffDayOracle

P = AttendanceStatus.PRESENT
A = AttendanceStatus.ABSENT
L = AttendanceStatus.LATE
E = AttendanceStatus.EXCUSED


def _aggregator(records, days_off=(), today=date(2025, 10, 1), history_days=30):
    day_off_store = InMemoryDayOffStore([PlannedDayOff(date_iso=d) for d in days_off])
    return AttendanceAggregator(
        InMemoryRecordStore(records),
        OffDayOracle(day_off_store),
        today=lambda: today,
        default_history_days=history_days,
    )


def _counts(bucket):
    return (bucket.present, bucket.late, bucket.absent, bucket.excused, bucket.early_dismissal)


def test_daily_buckets_match_each_record(analytics):
    buckets = analytics.get_history_by_timeframe("s1", Timeframe.DAILY, "2025-09-01", "2025-09-10")

    assert [b.bucket_start_iso for b in buckets] == [
        "2025-09-01", "2025-09-02", "2025-09-03", "2025-09-04",
        "2025-09-05", "2025-09-08", "2025-09-09", "2025-09-10",
    ]
    by_day = {b.bucket_start_iso: _counts(b) for b in buckets}
    assert by_day["2025-09-01"] == (1, 0, 0, 0, 0)
    assert by_day["2025-09-02"] == (0, 1, 0, 0, 1)
    assert by_day["2025-09-03"] == (0, 0, 1, 0, 0)
    assert by_day["2025-09-04"] == (0, 0, 0, 1, 0)
    assert by_day["2025-09-05"] == (1, 0, 0, 0, 1)
    assert by_day["2025-09-08"] == (0, 1, 0, 0, 0)
    assert by_day["2025-09-09"] == (0, 0, 1, 0, 1)
    assert by_day["2025-09-10"] == (1, 0, 0, 0, 0)


def test_weekly_rollup_starts_on_monday(analytics):
    buckets = analytics.get_history_by_timeframe("s1", "WEEKLY", "2025-09-01", "2025-09-10")

    assert [b.bucket_start_iso for b in buckets] == ["2025-09-01", "2025-09-08"]
    assert _counts(buckets[0]) == (2, 1, 1, 1, 2)
    assert _counts(buckets[1]) == (1, 1, 1, 0, 1)


def test_monthly_rollup(analytics):
    buckets = analytics.get_history_by_timeframe("s1", Timeframe.MONTHLY, "2025-09-01", "2025-09-30")

    assert len(buckets) == 1
    assert buckets[0].bucket_start_iso == "2025-09-01"
    assert _counts(buckets[0]) == (3, 2, 2, 1, 3)


def test_timeframe_name_is_case_insensitive(analytics):
    upper = analytics.get_history_by_timeframe("s1", "WEEKLY", "2025-09-01", "2025-09-10")
    lower = analytics.get_history_by_timeframe("s1", "weekly", "2025-09-01", "2025-09-10")
    assert upper == lower


def test_range_is_inclusive_on_both_ends(analytics):
    buckets = analytics.get_history_by_timeframe("s1", Timeframe.DAILY, "2025-09-02", "2025-09-09")
    assert buckets[0].bucket_start_iso == "2025-09-02"
    assert buckets[-1].bucket_start_iso == "2025-09-09"
    assert len(buckets) == 6


def test_weekly_bucket_keeps_monday_key_when_start_is_midweek(analytics):
    buckets = analytics.get_history_by_timeframe("s1", Timeframe.WEEKLY, "2025-09-03", "2025-09-05")

    assert len(buckets) == 1
    assert buckets[0].bucket_start_iso == "2025-09-01"
    # only 09-03 (ABSENT), 09-04 (EXCUSED), 09-05 (PRESENT, early) fall in the range
    assert _counts(buckets[0]) == (1, 0, 1, 1, 1)


def test_weekend_records_are_excluded_whatever_their_status(make_record):
    records = [
        make_record("2025-09-05", P),
        make_record("2025-09-06", A, early=True),  # Saturday
        make_record("2025-09-07", E),  # Sunday
        make_record("2025-09-08", L),
    ]
    buckets = _aggregator(records).get_history_by_timeframe("s1", "DAILY", "2025-09-05", "2025-09-08")

    assert [b.bucket_start_iso for b in buckets] == ["2025-09-05", "2025-09-08"]


def test_planned_day_off_records_are_excluded(make_record):
    records = [
        make_record("2025-09-02", P),
        make_record("2025-09-03", A, early=True),
        make_record("2025-09-04", E),
    ]
    aggregator = _aggregator(records, days_off=["2025-09-03", "2025-09-04"])

    daily = aggregator.get_history_by_timeframe("s1", "DAILY", "2025-09-01", "2025-09-05")
    weekly = aggregator.get_history_by_timeframe("s1", "WEEKLY", "2025-09-01", "2025-09-05")

    assert [b.bucket_start_iso for b in daily] == ["2025-09-02"]
    assert _counts(weekly[0]) == (1, 0, 0, 0, 0)


def test_range_of_only_off_days_yields_no_buckets(make_record):
    records = [make_record("2025-09-03", A), make_record("2025-09-04", L)]
    aggregator = _aggregator(records, days_off=["2025-09-03", "2025-09-04"])

    assert aggregator.get_history_by_timeframe("s1", "DAILY", "2025-09-03", "2025-09-04") == []


def test_excused_only_increments_excused(make_record):
    records = [make_record(d, E) for d in ("2025-09-01", "2025-09-02", "2025-09-03")]
    buckets = _aggregator(records).get_history_by_timeframe("s1", "WEEKLY", "2025-09-01", "2025-09-07")

    assert _counts(buckets[0]) == (0, 0, 0, 3, 0)


def test_early_dismissal_counts_alongside_status(make_record):
    records = [make_record("2025-09-01", P, early=True), make_record("2025-09-02", E, early=True)]
    buckets = _aggregator(records).get_history_by_timeframe("s1", "WEEKLY", "2025-09-01", "2025-09-07")

    assert buckets[0].present == 1
    assert buckets[0].excused == 1
    assert buckets[0].early_dismissal == 2


def test_other_students_are_ignored(make_record):
    records = [
        make_record("2025-09-01", P, student_id="s1"),
        make_record("2025-09-01", A, student_id="s2"),
    ]
    buckets = _aggregator(records).get_history_by_timeframe("s2", "DAILY", "2025-09-01", "2025-09-01")

    assert len(buckets) == 1
    assert _counts(buckets[0]) == (0, 0, 1, 0, 0)


def test_unknown_student_yields_empty_list(analytics):
    assert analytics.get_history_by_timeframe("nobody", "DAILY", "2025-09-01", "2025-09-10") == []


def test_leap_year_february_month_bucket(make_record):
    records = [
        make_record("2024-02-28", P),
        make_record("2024-02-29", A),
        make_record("2024-03-01", L),
    ]
    buckets = _aggregator(records).get_history_by_timeframe("s1", "MONTHLY", "2024-02-01", "2024-03-31")

    assert [b.bucket_start_iso for b in buckets] == ["2024-02-01", "2024-03-01"]
    assert _counts(buckets[0]) == (1, 0, 1, 0, 0)
    assert _counts(buckets[1]) == (0, 1, 0, 0, 0)


def test_week_spanning_new_year_stays_one_bucket(make_record):
    records = [
        make_record("2024-12-30", P),  # Monday
        make_record("2024-12-31", L),
        make_record("2025-01-02", A),  # Thursday
    ]
    aggregator = _aggregator(records)

    weekly = aggregator.get_history_by_timeframe("s1", "WEEKLY", "2024-12-30", "2025-01-05")
    monthly = aggregator.get_history_by_timeframe("s1", "MONTHLY", "2024-12-30", "2025-01-05")

    assert [b.bucket_start_iso for b in weekly] == ["2024-12-30"]
    assert _counts(weekly[0]) == (1, 1, 1, 0, 0)
    assert [b.bucket_start_iso for b in monthly] == ["2024-12-01", "2025-01-01"]


def test_buckets_sorted_unique_and_non_empty(make_record):
    records = [
        make_record("2025-03-14", P),
        make_record("2025-01-06", A),
        make_record("2025-02-03", L),
        make_record("2025-01-07", E),
        make_record("2025-03-03", P, early=True),
    ]
    aggregator = _aggregator(records)

    for timeframe in Timeframe:
        buckets = aggregator.get_history_by_timeframe("s1", timeframe, "2025-01-01", "2025-03-31")
        keys = [b.bucket_start_iso for b in buckets]
        assert keys == sorted(set(keys))
        assert all(not b.is_empty for b in buckets)


def test_counts_are_conserved_across_timeframes(make_record):
    records = [
        make_record("2025-09-01", P),
        make_record("2025-09-02", A),
        make_record("2025-09-06", A),  # Saturday, excluded
        make_record("2025-09-09", E),
        make_record("2025-09-15", L),  # planned day off, excluded
        make_record("2025-09-30", L),
        make_record("2025-10-01", P),
    ]
    aggregator = _aggregator(records, days_off=["2025-09-15"])

    for timeframe in Timeframe:
        buckets = aggregator.get_history_by_timeframe("s1", timeframe, "2025-09-01", "2025-10-01")
        assert sum(b.total_marked for b in buckets) == 5


def test_repeated_calls_are_identical(analytics):
    first = analytics.get_history_by_timeframe("s1", "WEEKLY", "2025-09-01", "2025-09-10")
    second = analytics.get_history_by_timeframe("s1", "WEEKLY", "2025-09-01", "2025-09-10")
    assert first == second


def test_start_after_end_yields_empty_list(analytics):
    assert analytics.get_history_by_timeframe("s1", "DAILY", "2025-09-10", "2025-09-01") == []


def test_default_range_is_last_thirty_days(make_record):
    records = [
        make_record("2025-09-01", A),  # today - 30
        make_record("2025-09-02", L),  # today - 29
        make_record("2025-10-01", P),  # today
    ]
    buckets = _aggregator(records).get_history_by_timeframe("s1", "DAILY")

    assert [b.bucket_start_iso for b in buckets] == ["2025-09-02", "2025-10-01"]


def test_default_start_counts_back_from_given_end(make_record):
    records = [make_record("2025-09-01", A), make_record("2025-09-03", L)]
    aggregator = _aggregator(records, history_days=2)

    buckets = aggregator.get_history_by_timeframe("s1", "DAILY", end_iso="2025-09-03")
    assert [b.bucket_start_iso for b in buckets] == ["2025-09-03"]


def test_default_start_stops_at_first_calendar_date(make_record):
    # 0001-01-01 is a Monday
    records = [make_record("0001-01-01", A), make_record("0001-01-02", L)]
    aggregator = _aggregator(records)

    buckets = aggregator.get_history_by_timeframe("s1", "DAILY", None, "0001-01-05")

    assert [(b.bucket_start_iso, b.absent, b.late) for b in buckets] == [
        ("0001-01-01", 1, 0),
        ("0001-01-02", 0, 1),
    ]


def test_zero_history_days_is_rejected():
    with pytest.raises(InvalidArgumentError) as exc:
        _aggregator([], history_days=0)
    assert exc.value.field == "default_history_days"


def test_unknown_timeframe_names_allowed_values(analytics):
    with pytest.raises(InvalidArgumentError) as exc:
        analytics.get_history_by_timeframe("s1", "YEARLY", "2025-09-01", "2025-09-10")

    assert exc.value.field == "timeframe"
    assert exc.value.allowed == ["DAILY", "MONTHLY", "WEEKLY"]
    assert exc.value.error_code.value == "INVALID_ARGUMENT"


@pytest.mark.parametrize(
    "start, end, field",
    [
        ("2025-02-30", "2025-03-01", "start_iso"),
        ("2025-09-01", "09/10/2025", "end_iso"),
    ],
)
def test_malformed_dates_name_the_parameter(analytics, start, end, field):
    with pytest.raises(InvalidArgumentError) as exc:
        analytics.get_history_by_timeframe("s1", "DAILY", start, end)
    assert exc.value.field == field


def test_returned_buckets_serialize_with_wire_names(analytics):
    bucket = analytics.get_history_by_timeframe("s1", "DAILY", "2025-09-02", "2025-09-02")[0]
    assert bucket.model_dump(by_alias=True) == {
        "present": 0,
        "late": 1,
        "absent": 0,
        "excused": 0,
        "earlyDismissal": 1,
        "bucketStartISO": "2025-09-02",
    }
