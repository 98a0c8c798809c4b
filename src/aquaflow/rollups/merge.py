"""Ordering and import de-duplication of entry collections."""

from __future__ import annotations

from typing import Iterable

from ..core.models import LogEntry
from ..core.time import parse_timestamp

__all__ = [
    "import_merge",
    "sort_entries",
]


def sort_entries(entries: Iterable[LogEntry]) -> list[LogEntry]:
    """Newest first. Entries with equal instants keep their relative order."""
    return sorted(entries, key=lambda e: parse_timestamp(e.timestamp), reverse=True)


def import_merge(existing: Iterable[LogEntry], incoming: Iterable[LogEntry]) -> list[LogEntry]:
    """Merge imported entries into a collection.

    An incoming entry is dropped when its id is already present, or when an
    existing entry has the same (timestamp, type, amount), so re-importing an
    export over overlapping data adds nothing. Accepted entries count as
    existing for the rest of the batch, so ids stay unique. Survivors go in
    front of the existing entries before the whole set is re-sorted newest
    first.
    """
    existing = list(existing)
    existing_ids = {e.id for e in existing}
    existing_content = {(e.timestamp, e.type, e.amount) for e in existing}

    added: list[LogEntry] = []
    for entry in incoming:
        key = (entry.timestamp, entry.type, entry.amount)
        if entry.id in existing_ids or key in existing_content:
            continue
        added.append(entry)
        existing_ids.add(entry.id)
        existing_content.add(key)
    return sort_entries([*added, *existing])
