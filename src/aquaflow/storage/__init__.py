"""Storage layer: snapshot files and the entry journal."""

from .journal import EntryJournal, EntryNotFoundError
from .snapshot import ENTRIES_KEY, SETTINGS_KEY, SnapshotStore, StorageError, atomic_write, read_import_file

__all__ = [
    "ENTRIES_KEY",
    "EntryJournal",
    "EntryNotFoundError",
    "SETTINGS_KEY",
    "SnapshotStore",
    "StorageError",
    "atomic_write",
    "read_import_file",
]
