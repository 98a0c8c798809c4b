"""Local day, range and calendar windows with DST awareness.

Compute UTC instants bounding local calendar days so that DST transition
days (23 or 25 hours) are filtered correctly.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator

import pytz

from ..core.time import resolve_timezone_name

__all__ = [
    "calendar_weeks",
    "compute_day_boundaries_utc",
    "compute_range_boundaries_utc",
    "each_day",
    "get_week_start",
    "time_in_window",
]

SUNDAY = 6


def get_week_start(day: date, start_on: int = SUNDAY) -> date:
    """Get start of week for a date.

    Parameters
    ----------
    day
        Date to get week start for
    start_on
        Day of week to start on (0=Monday, 6=Sunday)
    """
    days_since_start = (day.weekday() - start_on) % 7
    return day - timedelta(days=days_since_start)


def _local_midnight_utc(day: date, tz: pytz.BaseTzInfo) -> datetime:
    local = tz.localize(datetime(day.year, day.month, day.day, 0, 0, 0))
    return local.astimezone(pytz.UTC)


def compute_day_boundaries_utc(
    local_day: date,
    timezone_str: str | None = None,
) -> tuple[datetime, datetime]:
    """Compute UTC boundaries [start, end) for a local day.

    A "day" in local time may be 23, 24, or 25 hours in UTC.

    Examples
    --------
    >>> start, end = compute_day_boundaries_utc(date(2025, 3, 9), "America/New_York")
    >>> (end - start).total_seconds() / 3600
    23.0
    """
    return compute_range_boundaries_utc(local_day, local_day, timezone_str)


def compute_range_boundaries_utc(
    start_day: date,
    end_day: date,
    timezone_str: str | None = None,
) -> tuple[datetime, datetime]:
    """Compute UTC boundaries [start, end) covering whole local days.

    ``end_day`` is inclusive: the range ends at the following local midnight.
    """
    tz = pytz.timezone(resolve_timezone_name(timezone_str))
    return (
        _local_midnight_utc(start_day, tz),
        _local_midnight_utc(end_day + timedelta(days=1), tz),
    )


def each_day(start_day: date, end_day: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive."""
    day = start_day
    while day <= end_day:
        yield day
        day += timedelta(days=1)


def time_in_window(time_of_day: str, start: str, end: str) -> bool:
    """Inclusive "HH:mm" comparison.

    No wraparound: a window whose start is after its end matches nothing.
    """
    return start <= time_of_day <= end


def calendar_weeks(year: int, month: int, week_start_on: int = SUNDAY) -> list[list[date]]:
    """Full weeks covering a month, including neighbouring months' days."""
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])
    start = get_week_start(first, week_start_on)
    end = get_week_start(last, week_start_on) + timedelta(days=6)

    days = list(each_day(start, end))
    return [days[i : i + 7] for i in range(0, len(days), 7)]
