"""Unit tests for day-range helpers."""

from datetime import date, datetime, timezone

from backend.travelgpt.schedule.dates import (
    compute_day_range,
    day_index,
    end_of_day,
    format_elapsed,
    start_of_day,
)


def _utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_day_range_covers_every_day_inclusive(make_activity) -> None:
    """Test that activities spanning June 1 08:00 to June 5 10:00 give exactly 5 days."""
    activities = [
        make_activity(_utc(2025, 6, 1, 8), _utc(2025, 6, 1, 9)),
        make_activity(_utc(2025, 6, 5, 9), _utc(2025, 6, 5, 10)),
    ]

    days = compute_day_range(activities)

    assert days == [date(2025, 6, d) for d in range(1, 6)]


def test_day_range_uses_final_datetimes(make_activity) -> None:
    """Test that the latest finalDatetime extends the range."""
    activities = [make_activity(_utc(2025, 6, 1, 22), _utc(2025, 6, 3, 1))]

    assert compute_day_range(activities) == [date(2025, 6, 1), date(2025, 6, 2), date(2025, 6, 3)]


def test_day_range_empty() -> None:
    """Test that no activities give an empty range."""
    assert compute_day_range([]) == []


def test_start_and_end_of_day() -> None:
    """Test truncation to day boundaries."""
    dt = _utc(2025, 6, 1, 13, 45)

    assert start_of_day(dt) == _utc(2025, 6, 1)
    assert end_of_day(dt) == datetime(2025, 6, 1, 23, 59, 59, 999000, tzinfo=timezone.utc)


def test_day_index() -> None:
    """Test calendar-day offsets within a range."""
    days = [date(2025, 6, 1), date(2025, 6, 2)]

    assert day_index(days, _utc(2025, 6, 1, 23, 59)) == 0
    assert day_index(days, _utc(2025, 6, 2, 0, 0)) == 1
    assert day_index(days, _utc(2025, 6, 3)) is None
    assert day_index([], _utc(2025, 6, 1)) is None


def test_format_elapsed() -> None:
    """Test days when at least a day elapsed, hours otherwise."""
    assert format_elapsed(_utc(2025, 6, 1, 9), _utc(2025, 6, 1, 11, 30)) == "2h"
    assert format_elapsed(_utc(2025, 6, 1, 15), _utc(2025, 6, 2, 11)) == "20h"
    assert format_elapsed(_utc(2025, 6, 1, 15), _utc(2025, 6, 4, 11)) == "2d"
    assert format_elapsed(_utc(2025, 6, 1, 9), _utc(2025, 6, 1, 9)) == "0h"
