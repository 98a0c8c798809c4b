"""Entry journal: the single writer for the entry collection.

ALL entry mutations go through this layer. Each mutation re-sorts the
collection newest first and persists it as a whole snapshot.

Example:
    >>> journal = EntryJournal(SnapshotStore(Path("~/.config/aquaflow")))
    >>> entry = journal.add("WATER", amount=250, timestamp="2025-03-01T08:00:00Z")
    >>> journal.update(entry.id, "WATER", amount=300, timestamp=entry.timestamp)
    >>> journal.delete(entry.id)
"""

from __future__ import annotations

from typing import Any, Iterable

from ..core.models import LogEntry
from ..core.sample_data import remove_sample_entries
from ..core.validation import build_entry
from ..observability.loguru_config import get_logger
from ..rollups.merge import import_merge, sort_entries
from .snapshot import SnapshotStore

__all__ = [
    "EntryJournal",
    "EntryNotFoundError",
]

log = get_logger("storage")


class EntryNotFoundError(Exception):
    """Raised when no entry has the requested id."""

    pass


class EntryJournal:
    def __init__(self, store: SnapshotStore) -> None:
        self.store = store
        self._entries: list[LogEntry] | None = None

    @property
    def entries(self) -> list[LogEntry]:
        if self._entries is None:
            self._entries = self.store.load_entries()
        return self._entries

    def _commit(self, entries: Iterable[LogEntry]) -> None:
        self._entries = sort_entries(entries)
        self.store.save_entries(self._entries)

    def list_entries(self, limit: int | None = None) -> list[LogEntry]:
        """Entries newest first."""
        entries = list(self.entries)
        return entries[:limit] if limit is not None else entries

    def get(self, entry_id: str) -> LogEntry:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        raise EntryNotFoundError(f"Entry not found: {entry_id}")

    def add(self, entry_type: str, **fields: Any) -> LogEntry:
        """Validate and add a new entry with a fresh id.

        Raises
        ------
        ValidationError
            If the entry breaks a submit rule; nothing is stored
        """
        entry = build_entry(entry_type, **fields)
        self._commit([entry, *self.entries])
        log.info("Entry added", entry_id=entry.id, type=entry.type.value, amount=entry.amount)
        return entry

    def update(self, entry_id: str, entry_type: str, **fields: Any) -> LogEntry:
        """Replace an entry by id, keeping the id."""
        self.get(entry_id)
        entry = build_entry(entry_type, entry_id=entry_id, **fields)
        self._commit(entry if e.id == entry_id else e for e in self.entries)
        log.info("Entry updated", entry_id=entry_id)
        return entry

    def delete(self, entry_id: str) -> LogEntry:
        entry = self.get(entry_id)
        self._commit(e for e in self.entries if e.id != entry_id)
        log.info("Entry deleted", entry_id=entry_id)
        return entry

    def import_entries(self, incoming: Iterable[LogEntry]) -> int:
        """Merge imported entries, skipping known ids and duplicate content.

        Returns
        -------
        int
            Number of entries added
        """
        before = len(self.entries)
        merged = import_merge(self.entries, incoming)
        self._commit(merged)
        added = len(merged) - before
        log.info("Entries imported", added=added)
        return added

    def bulk_add(self, entries: Iterable[LogEntry]) -> int:
        new_entries = list(entries)
        self._commit([*new_entries, *self.entries])
        log.info("Entries bulk added", count=len(new_entries))
        return len(new_entries)

    def remove_sample_entries(self) -> int:
        kept = remove_sample_entries(self.entries)
        removed = len(self.entries) - len(kept)
        self._commit(kept)
        log.info("Sample entries removed", count=removed)
        return removed
