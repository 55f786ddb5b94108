"""Date-range helpers shared by the layout engine and the list view."""

from collections.abc import Iterable, Iterator, Sequence
from datetime import date, datetime, time, timedelta

from backend.travelgpt.models.activity import Activity

END_OF_DAY = time(23, 59, 59, 999000)


def start_of_day(dt: datetime) -> datetime:
    """Truncate to 00:00:00.000 of the same calendar day."""
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    """Move to 23:59:59.999 of the same calendar day."""
    return dt.replace(
        hour=END_OF_DAY.hour,
        minute=END_OF_DAY.minute,
        second=END_OF_DAY.second,
        microsecond=END_OF_DAY.microsecond,
    )


def days_between(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def timestamps(activities: Iterable[Activity]) -> list[datetime]:
    """All initial and final timestamps of the given activities."""
    result: list[datetime] = []
    for activity in activities:
        result.append(activity.initial_datetime)
        result.append(activity.final_datetime)
    return result


def compute_day_range(activities: Sequence[Activity]) -> list[date]:
    """Every calendar day from the earliest to the latest timestamp.

    Returns an empty list for an empty plan.
    """
    all_dates = timestamps(activities)
    if not all_dates:
        return []
    min_date = start_of_day(min(all_dates))
    max_date = end_of_day(max(all_dates))
    return list(days_between(min_date.date(), max_date.date()))


def day_index(days: Sequence[date], dt: datetime) -> int | None:
    """Index of the calendar day of dt within days, or None if it falls outside."""
    if not days:
        return None
    offset = (dt.date() - days[0]).days
    if 0 <= offset < len(days):
        return offset
    return None


def format_elapsed(start: datetime, end: datetime) -> str:
    """Whole days ("3d") when at least one day elapsed, otherwise whole hours ("2h")."""
    total_minutes = int((end - start).total_seconds() // 60)
    days, remainder = divmod(total_minutes, 60 * 24)
    if days > 0:
        return f"{days}d"
    return f"{remainder // 60}h"
