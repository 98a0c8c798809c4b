"""Entry aggregation and derived metrics.

Pure functions over an immutable list of entries: daily totals, the
dashboard's net balance, report filtering, trend series, day-part buckets,
summary statistics and calendar grids. Nothing here mutates its input or
touches storage; results depend only on the arguments, a reference ``now``
and the timezone.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Iterator, Sequence

from ..core.models import DayParts, EntryType, LogEntry, UserSettings
from ..core.time import get_current_time, local_date, local_time_of_day, parse_timestamp
from .merge import sort_entries
from .time_windows import calendar_weeks, compute_range_boundaries_utc, each_day, time_in_window

__all__ = [
    "CalendarDay",
    "DailyTrendSeries",
    "DashboardSummary",
    "DayPartBucket",
    "DayTotals",
    "Report",
    "SummaryStats",
    "TrendPoint",
    "active_day_count",
    "build_report",
    "calendar_month",
    "daily_trend_series",
    "dashboard_summary",
    "day_part_buckets",
    "day_totals",
    "entries_on",
    "range_filter",
    "round_half_up",
    "round_one_decimal",
    "summary_stats",
    "today_net_volume",
]


def round_half_up(value: float) -> int:
    """Nearest integer, halves toward positive infinity (-2.5 -> -2)."""
    return math.floor(value + 0.5)


def round_one_decimal(value: float) -> float:
    """One decimal from the exact binary value, ties up (29 / 20 -> 1.4)."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class DayTotals:
    intake: int = 0
    output: int = 0

    @property
    def net(self) -> int:
        return self.intake - self.output

    def add(self, entry: LogEntry) -> DayTotals:
        if entry.type == EntryType.WATER:
            return DayTotals(self.intake + entry.amount, self.output)
        if entry.type == EntryType.URINE:
            return DayTotals(self.intake, self.output + entry.amount)
        return self

    def to_dict(self) -> dict[str, int]:
        return {"intake": self.intake, "output": self.output, "net": self.net}


def _totals_by_day(entries: Iterable[LogEntry], timezone_str: str | None) -> dict[date, DayTotals]:
    totals: dict[date, DayTotals] = defaultdict(DayTotals)
    for entry in entries:
        if entry.is_volume:
            day = local_date(entry.timestamp, timezone_str)
            totals[day] = totals[day].add(entry)
    return totals


def day_totals(entries: Iterable[LogEntry], day: date, timezone_str: str | None = None) -> DayTotals:
    """Intake, output and net for one local calendar day. Notes are ignored."""
    totals = DayTotals()
    for entry in entries:
        if entry.is_volume and local_date(entry.timestamp, timezone_str) == day:
            totals = totals.add(entry)
    return totals


def entries_on(entries: Iterable[LogEntry], day: date, timezone_str: str | None = None) -> list[LogEntry]:
    """Entries of one local day, newest first."""
    return sort_entries(e for e in entries if local_date(e.timestamp, timezone_str) == day)


def today_net_volume(
    entries: Iterable[LogEntry],
    now: datetime | None = None,
    timezone_str: str | None = None,
) -> int:
    """Today's intake minus the urine voided since the first intake.

    Voids recorded before the day's first intake do not count against the
    balance. Without any intake today the result is 0.
    """
    now = now or get_current_time(timezone_str)
    today = local_date(now, timezone_str)
    todays = [e for e in entries if local_date(e.timestamp, timezone_str) == today]

    intakes = [e for e in todays if e.type == EntryType.WATER]
    if not intakes:
        return 0

    first_intake = min(parse_timestamp(e.timestamp, timezone_str) for e in intakes)
    counted_urine = sum(
        e.amount
        for e in todays
        if e.type == EntryType.URINE and parse_timestamp(e.timestamp, timezone_str) >= first_intake
    )
    return sum(e.amount for e in intakes) - counted_urine


def range_filter(
    entries: Iterable[LogEntry],
    start_date: date,
    end_date: date,
    start_time: str = "00:00",
    end_time: str = "23:59",
    timezone_str: str | None = None,
) -> list[LogEntry]:
    """Entries inside a date range and a daily time-of-day window.

    Both dates are whole local days. The time window compares "HH:mm"
    strings inclusively and does not wrap past midnight, so an inverted
    window (start after end) selects nothing. Result is newest first.
    """
    range_start, range_end = compute_range_boundaries_utc(start_date, end_date, timezone_str)

    selected = []
    for entry in entries:
        instant = parse_timestamp(entry.timestamp, timezone_str)
        if not (range_start <= instant < range_end):
            continue
        if time_in_window(local_time_of_day(instant, timezone_str), start_time, end_time):
            selected.append(entry)

    return sort_entries(selected)


def active_day_count(entries: Iterable[LogEntry], timezone_str: str | None = None) -> int:
    """Distinct local days with an intake or void; never less than 1."""
    days = {local_date(e.timestamp, timezone_str) for e in entries if e.is_volume}
    return max(1, len(days))


@dataclass(frozen=True)
class TrendPoint:
    date: date
    intake: int
    output: int

    @property
    def net(self) -> int:
        return self.intake - self.output

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "intake": self.intake, "output": self.output, "net": self.net}


class DailyTrendSeries:
    """One point per day of a range, zero-entry days included.

    Iterating computes the points lazily; iterating again starts over.
    """

    def __init__(
        self,
        entries: Sequence[LogEntry],
        start_date: date,
        end_date: date,
        timezone_str: str | None = None,
    ) -> None:
        self.entries = tuple(entries)
        self.start_date = start_date
        self.end_date = end_date
        self.timezone_str = timezone_str

    def __iter__(self) -> Iterator[TrendPoint]:
        totals = _totals_by_day(self.entries, self.timezone_str)
        for day in each_day(self.start_date, self.end_date):
            day_total = totals.get(day, DayTotals())
            yield TrendPoint(day, day_total.intake, day_total.output)

    def __len__(self) -> int:
        return max(0, (self.end_date - self.start_date).days + 1)

    def to_list(self) -> list[dict[str, Any]]:
        return [point.to_dict() for point in self]


def daily_trend_series(
    entries: Sequence[LogEntry],
    start_date: date,
    end_date: date,
    timezone_str: str | None = None,
) -> DailyTrendSeries:
    return DailyTrendSeries(entries, start_date, end_date, timezone_str)


@dataclass(frozen=True)
class DayPartBucket:
    """Average per active day for one day part."""

    name: str
    intake: int
    urine: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "intake": self.intake, "urine": self.urine}


def day_part_buckets(
    entries: Iterable[LogEntry],
    day_parts: DayParts,
    active_days: int,
    timezone_str: str | None = None,
) -> list[DayPartBucket]:
    """Split intake and output over the configured day parts.

    The first window containing the entry's "HH:mm" wins; entries outside
    every window are left out. Sums are divided by ``active_days`` and
    rounded.
    """
    windows = day_parts.items()
    sums = {name: [0, 0] for name, _ in windows}

    for entry in entries:
        if not entry.is_volume:
            continue
        time_of_day = local_time_of_day(entry.timestamp, timezone_str)
        part = next((name for name, w in windows if time_in_window(time_of_day, w.start, w.end)), None)
        if part is None:
            continue
        sums[part][0 if entry.type == EntryType.WATER else 1] += entry.amount

    return [
        DayPartBucket(
            name=name.capitalize(),
            intake=round_half_up(sums[name][0] / active_days),
            urine=round_half_up(sums[name][1] / active_days),
        )
        for name, _ in windows
    ]


@dataclass(frozen=True)
class SummaryStats:
    avg_intake_per_day: int
    avg_urine_per_day: int
    avg_net_per_day: int
    avg_intake_entries_per_day: float
    avg_urine_entries_per_day: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "avg_intake_per_day": self.avg_intake_per_day,
            "avg_urine_per_day": self.avg_urine_per_day,
            "avg_net_per_day": self.avg_net_per_day,
            "avg_intake_entries_per_day": self.avg_intake_entries_per_day,
            "avg_urine_entries_per_day": self.avg_urine_entries_per_day,
        }


def summary_stats(entries: Iterable[LogEntry], active_days: int) -> SummaryStats:
    """Per-day averages of volumes (whole ml) and entry counts (one decimal)."""
    entries = list(entries)
    water = [e for e in entries if e.type == EntryType.WATER]
    urine = [e for e in entries if e.type == EntryType.URINE]

    total_water = sum(e.amount for e in water)
    total_urine = sum(e.amount for e in urine)

    return SummaryStats(
        avg_intake_per_day=round_half_up(total_water / active_days),
        avg_urine_per_day=round_half_up(total_urine / active_days),
        avg_net_per_day=round_half_up((total_water - total_urine) / active_days),
        avg_intake_entries_per_day=round_one_decimal(len(water) / active_days),
        avg_urine_entries_per_day=round_one_decimal(len(urine) / active_days),
    )


@dataclass(frozen=True)
class DashboardSummary:
    """Today's totals as shown on the tracking screen."""

    day: date
    intake_total: int
    intake_count: int
    urine_total: int
    urine_count: int
    net_volume: int
    entries: list[LogEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.day.isoformat(),
            "intake_total": self.intake_total,
            "intake_count": self.intake_count,
            "urine_total": self.urine_total,
            "urine_count": self.urine_count,
            "net_volume": self.net_volume,
            "entries": [e.to_dict() for e in self.entries],
        }


def dashboard_summary(
    entries: Sequence[LogEntry],
    now: datetime | None = None,
    timezone_str: str | None = None,
) -> DashboardSummary:
    """Today's counts and volumes with entries in ascending time order."""
    now = now or get_current_time(timezone_str)
    today = local_date(now, timezone_str)
    todays = list(reversed(entries_on(entries, today, timezone_str)))

    water = [e for e in todays if e.type == EntryType.WATER]
    urine = [e for e in todays if e.type == EntryType.URINE]

    return DashboardSummary(
        day=today,
        intake_total=sum(e.amount for e in water),
        intake_count=len(water),
        urine_total=sum(e.amount for e in urine),
        urine_count=len(urine),
        net_volume=today_net_volume(todays, now, timezone_str),
        entries=todays,
    )


@dataclass
class Report:
    """Everything the report screen derives for one window."""

    start_date: date
    end_date: date
    start_time: str
    end_time: str
    entries: list[LogEntry]
    active_days: int
    stats: SummaryStats
    trend: DailyTrendSeries
    day_parts: list[DayPartBucket]

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "entry_count": len(self.entries),
            "active_days": self.active_days,
            "stats": self.stats.to_dict(),
            "trend": self.trend.to_list(),
            "day_parts": [bucket.to_dict() for bucket in self.day_parts],
        }


def build_report(
    entries: Iterable[LogEntry],
    settings: UserSettings,
    start_date: date,
    end_date: date,
    start_time: str = "00:00",
    end_time: str = "23:59",
    timezone_str: str | None = None,
) -> Report:
    filtered = range_filter(entries, start_date, end_date, start_time, end_time, timezone_str)
    active_days = active_day_count(filtered, timezone_str)

    return Report(
        start_date=start_date,
        end_date=end_date,
        start_time=start_time,
        end_time=end_time,
        entries=filtered,
        active_days=active_days,
        stats=summary_stats(filtered, active_days),
        trend=daily_trend_series(filtered, start_date, end_date, timezone_str),
        day_parts=day_part_buckets(filtered, settings.day_parts, active_days, timezone_str),
    )


@dataclass(frozen=True)
class CalendarDay:
    date: date
    in_month: bool
    totals: DayTotals

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "in_month": self.in_month, **self.totals.to_dict()}


def calendar_month(
    entries: Iterable[LogEntry],
    year: int,
    month: int,
    timezone_str: str | None = None,
) -> list[list[CalendarDay]]:
    """Sunday-start weeks covering a month with each day's totals."""
    totals = _totals_by_day(entries, timezone_str)
    return [
        [CalendarDay(day, day.month == month, totals.get(day, DayTotals())) for day in week]
        for week in calendar_weeks(year, month)
    ]
