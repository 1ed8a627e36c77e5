"""Calendar helpers shared by the analytics engine and the range queries.

All bucketing happens on UTC calendar dates. Naive datetimes are taken to
be UTC already.
"""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, time, timedelta

from wellness.errors import ValidationError

ONE_DAY = timedelta(days=1)


def to_utc(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utc_date(value: date | datetime) -> date:
    """Calendar date of *value* in UTC. Plain dates pass through."""
    if isinstance(value, datetime):
        return to_utc(value).date()
    return value


def range_bounds(start: date | datetime, end: date | datetime) -> tuple[datetime, datetime]:
    """Turn a user-supplied range into inclusive UTC datetime bounds.

    A plain ``date`` start covers the whole day from midnight; a plain
    ``date`` end covers the whole day up to its last microsecond.
    """
    if isinstance(start, datetime):
        lower = to_utc(start)
    else:
        lower = datetime.combine(start, time.min, tzinfo=UTC)
    if isinstance(end, datetime):
        upper = to_utc(end)
    else:
        upper = datetime.combine(end, time.max, tzinfo=UTC)
    if lower > upper:
        raise ValidationError(f"start_date {start} is after end_date {end}")
    return lower, upper


def inclusive_day_count(start: date | datetime, end: date | datetime) -> int:
    """Number of calendar days from *start* to *end*, both included."""
    return (utc_date(end) - utc_date(start)).days + 1


def week_start_monday(day: date) -> date:
    """Monday of the week containing *day*."""
    return day - timedelta(days=day.weekday())


def week_start_sunday(day: date) -> date:
    """Sunday of the week containing *day* (weeks run Sunday–Saturday)."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def iso_week_key(day: date) -> str:
    """ISO ``YYYY-Www`` label of the week containing *day*."""
    iso = day.isocalendar()
    return f"{iso.year}-W{iso.week:02d}"


def iter_days(start: date, end: date):
    """Yield every date from *start* to *end* inclusive."""
    day = start
    while day <= end:
        yield day
        day += ONE_DAY


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (57.5 → 58, unlike ``round``)."""
    return math.floor(value + 0.5)


def mean(values: list[float]) -> float:
    """Arithmetic mean; 0.0 for an empty list."""
    if not values:
        return 0.0
    return sum(values) / len(values)
