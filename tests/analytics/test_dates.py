"""Unit tests for the calendar helpers behind range queries and bucketing."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from wellness.analytics.dates import (
    inclusive_day_count,
    iso_week_key,
    range_bounds,
    round_half_up,
    utc_date,
    week_start_monday,
    week_start_sunday,
)
from wellness.errors import ValidationError

pytestmark = pytest.mark.unit


class TestRangeBounds:
    def test_dates_cover_whole_days(self):
        lower, upper = range_bounds(date(2024, 1, 1), date(2024, 1, 3))
        assert lower == datetime(2024, 1, 1, tzinfo=UTC)
        assert upper == datetime(2024, 1, 3, 23, 59, 59, 999999, tzinfo=UTC)

    def test_naive_datetimes_are_utc(self):
        lower, _ = range_bounds(datetime(2024, 1, 1, 6), date(2024, 1, 1))
        assert lower == datetime(2024, 1, 1, 6, tzinfo=UTC)

    def test_single_day_range(self):
        lower, upper = range_bounds(date(2024, 1, 1), date(2024, 1, 1))
        assert lower < upper

    def test_start_after_end_rejected(self):
        with pytest.raises(ValidationError, match="after end_date"):
            range_bounds(date(2024, 1, 2), date(2024, 1, 1))


def test_inclusive_day_count():
    assert inclusive_day_count(date(2024, 1, 1), date(2024, 1, 14)) == 14
    assert (
        inclusive_day_count(
            datetime(2024, 1, 1, 0, 0, tzinfo=UTC),
            datetime(2024, 1, 3, 23, 59, 59, tzinfo=UTC),
        )
        == 3
    )


def test_utc_date_converts_offsets():
    plus_ten = timezone(timedelta(hours=10))
    assert utc_date(datetime(2024, 1, 2, 5, 0, tzinfo=plus_ten)) == date(2024, 1, 1)


def test_week_starts():
    wednesday = date(2024, 1, 10)
    assert week_start_monday(wednesday) == date(2024, 1, 8)
    assert week_start_sunday(wednesday) == date(2024, 1, 7)
    assert week_start_sunday(date(2024, 1, 7)) == date(2024, 1, 7)


def test_iso_week_key_uses_iso_year():
    # 2024-12-30 belongs to ISO week 1 of 2025
    assert iso_week_key(date(2024, 12, 30)) == "2025-W01"
    assert iso_week_key(date(2024, 1, 1)) == "2024-W01"


@pytest.mark.parametrize(("value", "expected"), [(57.14, 57), (70.5, 71), (2.5, 3), (0.49, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
