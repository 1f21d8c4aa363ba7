"""Tests for reporting window parsing."""

from datetime import UTC, datetime, timedelta

import pytest

from app.core.exceptions import ValidationError
from app.services.time_window import end_of_day, parse_end, parse_start, resolve_window

NOW = datetime(2025, 5, 4, 15, 30, tzinfo=UTC)


def test_date_only_start_is_midnight_utc():
    assert parse_start("2025-05-01") == datetime(2025, 5, 1, tzinfo=UTC)


def test_date_only_end_is_inclusive_end_of_day():
    assert parse_end("2025-05-01") == datetime(2025, 5, 1, 23, 59, 59, 999999, tzinfo=UTC)


def test_full_timestamp_end_is_kept():
    assert parse_end("2025-05-01T10:00:00Z") == datetime(2025, 5, 1, 10, tzinfo=UTC)


def test_offset_timestamp_converted_to_utc():
    assert parse_start("2025-05-01T10:00:00+02:00") == datetime(2025, 5, 1, 8, tzinfo=UTC)


@pytest.mark.parametrize("value", [None, ""])
def test_missing_bounds_are_none(value):
    assert parse_start(value) is None
    assert parse_end(value) is None


def test_invalid_date_raises_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        parse_start("yesterday")
    assert exc_info.value.status_code == 400


def test_default_window_is_trailing_days_to_end_of_today():
    window = resolve_window(None, None, default_days=7, now=NOW)

    assert window.start == NOW - timedelta(days=7)
    assert window.end == end_of_day(NOW)
    assert window.end == datetime(2025, 5, 4, 23, 59, 59, 999999, tzinfo=UTC)


def test_explicit_window():
    window = resolve_window("2025-04-01", "2025-04-02", default_days=30, now=NOW)

    assert window.start == datetime(2025, 4, 1, tzinfo=UTC)
    assert window.end == datetime(2025, 4, 2, 23, 59, 59, 999999, tzinfo=UTC)
