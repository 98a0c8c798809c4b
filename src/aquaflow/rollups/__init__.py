"""Aggregation engine: totals, filters, trends, exports and merges."""

from .aggregator import (
    CalendarDay,
    DailyTrendSeries,
    DashboardSummary,
    DayPartBucket,
    DayTotals,
    Report,
    SummaryStats,
    TrendPoint,
    active_day_count,
    build_report,
    calendar_month,
    daily_trend_series,
    dashboard_summary,
    day_part_buckets,
    day_totals,
    entries_on,
    range_filter,
    summary_stats,
    today_net_volume,
)
from .export import CSV_HEADERS, csv_serialize, export_filename
from .merge import import_merge, sort_entries
from .time_windows import (
    calendar_weeks,
    compute_day_boundaries_utc,
    compute_range_boundaries_utc,
    each_day,
    get_week_start,
    time_in_window,
)

__all__ = [
    # Time windows
    "calendar_weeks",
    "compute_day_boundaries_utc",
    "compute_range_boundaries_utc",
    "each_day",
    "get_week_start",
    "time_in_window",
    # Aggregation
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
    "summary_stats",
    "today_net_volume",
    # Export / import
    "CSV_HEADERS",
    "csv_serialize",
    "export_filename",
    "import_merge",
    "sort_entries",
]
