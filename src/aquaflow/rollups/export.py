"""CSV export of log entries."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from ..core.models import NONE_CATEGORY_ID, EntryType, IntakeCategory, LogEntry
from ..core.time import format_export_timestamp, get_current_time
from ..observability.loguru_config import log_timing

__all__ = [
    "CSV_HEADERS",
    "csv_serialize",
    "export_filename",
    "quote_field",
]

CSV_HEADERS = ("Type", "Intake Type", "Amount (ml)", "Timestamp", "Notes")
NEEDS_QUOTING = (",", '"', "\n", "\r")


def quote_field(value: str) -> str:
    """Wrap in double quotes, doubling any embedded quote."""
    return '"' + value.replace('"', '""') + '"'


def _intake_label(entry: LogEntry, categories: Sequence[IntakeCategory]) -> str:
    category = next((c for c in categories if c.id == entry.intake_type_id), None)
    if category is None or category.id == NONE_CATEGORY_ID:
        return ""
    if any(ch in category.label for ch in NEEDS_QUOTING):
        return quote_field(category.label)
    return category.label


@log_timing(component="engine")
def csv_serialize(
    entries: Iterable[LogEntry],
    intake_categories: Sequence[IntakeCategory],
    timezone_str: str | None = None,
) -> str:
    """Render entries as CSV, one row per entry after the header.

    Notes are always quoted, intake labels only when they hold a comma,
    quote or line break. Amounts are blank for notes and the
    timestamp is local "yyyy-MM-dd HH:mm:ss". Rows are joined by "\\n".
    """
    lines = [",".join(CSV_HEADERS)]
    for entry in entries:
        row = [
            entry.type.display_name,
            _intake_label(entry, intake_categories),
            "" if entry.type == EntryType.NOTE else str(entry.amount),
            format_export_timestamp(entry.timestamp, timezone_str),
            quote_field(entry.notes or ""),
        ]
        lines.append(",".join(row))
    return "\n".join(lines)


def export_filename(now: datetime | None = None, timezone_str: str | None = None) -> str:
    """aquaflow_export_<yyyyMMdd_HHmm>.csv in local time."""
    now = now or get_current_time(timezone_str)
    return f"aquaflow_export_{now:%Y%m%d_%H%M}.csv"
