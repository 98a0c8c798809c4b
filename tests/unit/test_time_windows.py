"""Tests for local day windows.

DST days in New York are 23 (spring forward) or 25 (fall back) hours long.
"""

from datetime import date

import pytest

from aquaflow.rollups.time_windows import (
    calendar_weeks,
    compute_day_boundaries_utc,
    compute_range_boundaries_utc,
    each_day,
    get_week_start,
    time_in_window,
)


def test_get_week_start_sunday():
    """Wednesday, Oct 8, 2025 belongs to the week starting Sunday Oct 5."""
    assert get_week_start(date(2025, 10, 8)) == date(2025, 10, 5)


def test_get_week_start_monday():
    assert get_week_start(date(2025, 10, 8), start_on=0) == date(2025, 10, 6)


def test_get_week_start_on_start_day():
    assert get_week_start(date(2025, 10, 5)) == date(2025, 10, 5)


def test_compute_day_boundaries_utc_regular():
    """Regular October day: midnight EDT is 04:00 UTC."""
    start_utc, end_utc = compute_day_boundaries_utc(date(2025, 10, 8), "America/New_York")

    assert start_utc.isoformat() == "2025-10-08T04:00:00+00:00"
    assert end_utc.isoformat() == "2025-10-09T04:00:00+00:00"
    assert (end_utc - start_utc).total_seconds() == 24 * 3600


def test_compute_day_boundaries_utc_spring_forward():
    """March 9, 2025: 2am EST -> 3am EDT, a 23 hour day."""
    start_utc, end_utc = compute_day_boundaries_utc(date(2025, 3, 9), "America/New_York")

    assert start_utc.isoformat() == "2025-03-09T05:00:00+00:00"
    assert end_utc.isoformat() == "2025-03-10T04:00:00+00:00"
    assert (end_utc - start_utc).total_seconds() == 23 * 3600


def test_compute_day_boundaries_utc_fall_back():
    """November 2, 2025: 2am EDT -> 1am EST, a 25 hour day."""
    start_utc, end_utc = compute_day_boundaries_utc(date(2025, 11, 2), "America/New_York")

    assert (end_utc - start_utc).total_seconds() == 25 * 3600


def test_compute_day_boundaries_uses_default_timezone():
    """The default zone is pinned to New York by the test configuration."""
    start_utc, _ = compute_day_boundaries_utc(date(2025, 1, 15))

    assert start_utc.isoformat() == "2025-01-15T05:00:00+00:00"


def test_compute_range_boundaries_end_is_inclusive():
    start_utc, end_utc = compute_range_boundaries_utc(date(2025, 1, 1), date(2025, 1, 3), "UTC")

    assert start_utc.isoformat() == "2025-01-01T00:00:00+00:00"
    assert end_utc.isoformat() == "2025-01-04T00:00:00+00:00"


def test_each_day_inclusive():
    assert list(each_day(date(2025, 2, 27), date(2025, 3, 2))) == [
        date(2025, 2, 27),
        date(2025, 2, 28),
        date(2025, 3, 1),
        date(2025, 3, 2),
    ]


def test_each_day_inverted_is_empty():
    assert list(each_day(date(2025, 3, 2), date(2025, 3, 1))) == []


@pytest.mark.parametrize(
    "time_of_day,start,end,expected",
    [
        ("10:00", "10:00", "12:00", True),
        ("12:00", "10:00", "12:00", True),
        ("09:59", "10:00", "12:00", False),
        ("12:01", "10:00", "12:00", False),
        ("23:00", "22:00", "02:00", False),  # no wraparound
        ("01:00", "22:00", "02:00", False),
    ],
)
def test_time_in_window(time_of_day, start, end, expected):
    assert time_in_window(time_of_day, start, end) is expected


def test_calendar_weeks_pads_to_full_weeks():
    weeks = calendar_weeks(2025, 2)

    assert weeks[0][0] == date(2025, 1, 26)
    assert weeks[-1][-1] == date(2025, 3, 1)
    assert all(week[0].weekday() == 6 for week in weeks)
