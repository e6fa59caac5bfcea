# tests/conftest.py
"""
Shared fixtures for the attendance analytics tests.

- A fixed clock (2025-10-01, a Wednesday) so "today" never drifts.
- The reference week of records for student s1 (2025-09-01 .. 2025-09-10).
- In-memory stores and a fully wired analytics engine over them.
- A disposable in-memory SQLite session for the repository and alert tests.
"""

from __future__ import annotations

from datetime import date

import pytest

from attendance_app.config.database import create_db_engine, create_session_factory, init_db
from attendance_app.config.settings import Settings
from attendance_app.repositories.attendance.in_memory import (
    InMemoryDayOffStore,
    InMemoryRecordStore,
    InMemoryStudentRoster,
)
from attendance_app.schemas.attendance.attendance_record import AttendanceRecord
from attendance_app.schemas.common.enums import AttendanceStatus
from attendance_app.services.attendance.analytics import AttendanceAnalytics

FIXED_TODAY = date(2025, 10, 1)

P = AttendanceStatus.PRESENT
A = AttendanceStatus.ABSENT
L = AttendanceStatus.LATE
E = AttendanceStatus.EXCUSED


def _record(date_iso: str, status: AttendanceStatus, early: bool = False, student_id: str = "s1") -> AttendanceRecord:
    return AttendanceRecord(
        student_id=student_id,
        date_iso=date_iso,
        status=status,
        early_dismissal=early,
    )


@pytest.fixture
def make_record():
    """Factory: make_record("2025-09-01", PRESENT, early=False, student_id="s1")."""
    return _record


@pytest.fixture
def fixed_today():
    return lambda: FIXED_TODAY


@pytest.fixture
def reference_records():
    """Student s1, Mon 2025-09-01 through Wed 2025-09-10, no weekend records."""
    return [
        _record("2025-09-01", P),
        _record("2025-09-02", L, early=True),
        _record("2025-09-03", A),
        _record("2025-09-04", E),
        _record("2025-09-05", P, early=True),
        _record("2025-09-08", L),
        _record("2025-09-09", A, early=True),
        _record("2025-09-10", P),
    ]


@pytest.fixture
def record_store(reference_records):
    return InMemoryRecordStore(reference_records)


@pytest.fixture
def day_off_store():
    return InMemoryDayOffStore()


@pytest.fixture
def roster():
    return InMemoryStudentRoster(["s1", "s2"])


@pytest.fixture
def calendar_settings():
    return Settings(OFF_DAY_STRATEGY="calendar", DEFAULT_HISTORY_DAYS=30)


@pytest.fixture
def analytics(record_store, day_off_store, roster, calendar_settings, fixed_today):
    return AttendanceAnalytics.build(
        record_store,
        day_off_store,
        roster=roster,
        settings=calendar_settings,
        today=fixed_today,
    )


@pytest.fixture
def db_session():
    engine = create_db_engine("sqlite://", echo=False)
    init_db(engine)
    factory = create_session_factory(engine)
    session = factory()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
