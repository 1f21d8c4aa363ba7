"""Reporting window parsing.

Query parameters accept either a calendar date (``2025-05-04``) or a full
ISO-8601 timestamp. Dates are interpreted in UTC; a date-only end bound
covers the whole day.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta

from app.core.exceptions import ValidationError

END_OF_DAY = time(23, 59, 59, 999999)


@dataclass(frozen=True)
class TimeWindow:
    """Inclusive [start, end] reporting window in UTC."""

    start: datetime
    end: datetime


def as_utc(moment: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def end_of_day(moment: datetime | date) -> datetime:
    """23:59:59.999999 UTC on the day of ``moment``."""
    day = as_utc(moment).date() if isinstance(moment, datetime) else moment
    return datetime.combine(day, END_OF_DAY, tzinfo=UTC)


def _parse(value: str, field: str) -> datetime | date:
    value = value.strip()
    try:
        if len(value) == 10:
            return date.fromisoformat(value)
        return as_utc(datetime.fromisoformat(value))
    except ValueError as e:
        raise ValidationError(f"Invalid {field}: {value!r}", error=str(e)) from e


def parse_start(value: str | None) -> datetime | None:
    """Parse a start bound; a date-only value starts at midnight UTC."""
    if not value:
        return None
    parsed = _parse(value, "startDate")
    if isinstance(parsed, datetime):
        return parsed
    return datetime.combine(parsed, time.min, tzinfo=UTC)


def parse_end(value: str | None) -> datetime | None:
    """Parse an end bound; a date-only value ends at the last instant of that day."""
    if not value:
        return None
    parsed = _parse(value, "endDate")
    if isinstance(parsed, datetime):
        return parsed
    return end_of_day(parsed)


def resolve_window(
    start: str | None,
    end: str | None,
    *,
    default_days: int,
    now: datetime | None = None,
) -> TimeWindow:
    """Build a reporting window, defaulting to the trailing ``default_days``.

    A missing end resolves to the end of the current UTC day so records
    created later today are still included.
    """
    now = as_utc(now) if now is not None else datetime.now(UTC)
    start_at = parse_start(start) or now - timedelta(days=default_days)
    end_at = parse_end(end) or end_of_day(now)
    return TimeWindow(start=start_at, end=end_at)
