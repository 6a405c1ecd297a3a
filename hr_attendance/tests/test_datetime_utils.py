"""
Tests for timezone helpers
"""
from datetime import date, datetime, timezone

from hr_attendance.tests.conftest import at
from hr_attendance.utils.datetime_utils import (
    ensure_utc,
    format_seconds_of_day,
    get_work_date,
    iso_local,
    seconds_of_day,
    to_local,
)


def test_ensure_utc_treats_naive_as_utc():
    naive = datetime(2026, 10, 19, 4, 0)

    assert ensure_utc(naive) == datetime(2026, 10, 19, 4, 0, tzinfo=timezone.utc)
    assert ensure_utc(at(9, 30)) == datetime(2026, 10, 19, 4, 0, tzinfo=timezone.utc)
    assert ensure_utc(None) is None


def test_iso_local_never_uses_z():
    value = iso_local(datetime(2026, 10, 19, 4, 0, tzinfo=timezone.utc))

    assert value == "2026-10-19T09:30:00+05:30"
    assert iso_local(None) is None


def test_to_local_converts_naive_utc():
    assert to_local(datetime(2026, 10, 19, 4, 0)).hour == 9


def test_work_date_uses_attendance_timezone():
    # 19:00 UTC is already the next day in Asia/Kolkata
    assert get_work_date(datetime(2026, 10, 19, 19, 0, tzinfo=timezone.utc)) == date(2026, 10, 20)
    assert get_work_date(at(0, 30)) == date(2026, 10, 19)


def test_seconds_of_day_is_local():
    assert seconds_of_day(datetime(2026, 10, 19, 4, 0, 15, tzinfo=timezone.utc)) == 9 * 3600 + 30 * 60 + 15


def test_format_seconds_of_day():
    assert format_seconds_of_day(0) == "00:00:00"
    assert format_seconds_of_day(34200) == "09:30:00"
    assert format_seconds_of_day(86399) == "23:59:59"
