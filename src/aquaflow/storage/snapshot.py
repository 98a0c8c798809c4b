"""Snapshot storage for entries and settings.

Each collection lives in one JSON file under the data directory and is
always written whole:
- ``aquaflow_entries.json``: list of entries, newest first
- ``aquaflow_settings.json``: one settings object

Writes are atomic (temp file + fsync + rename + directory fsync), so a
crash leaves either the old or the new snapshot, never a partial one.
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.models import LogEntry, UserSettings
from ..core.preferences import merge_settings
from ..observability.loguru_config import get_logger

__all__ = [
    "ENTRIES_KEY",
    "SETTINGS_KEY",
    "SnapshotStore",
    "StorageError",
    "atomic_write",
    "read_import_file",
]

ENTRIES_KEY = "aquaflow_entries"
SETTINGS_KEY = "aquaflow_settings"

log = get_logger("storage")


class StorageError(Exception):
    """Raised when a snapshot cannot be read or written."""

    pass


def atomic_write(file_path: Path, content: str, *, create_dirs: bool = True) -> None:
    """Atomic file write helper (temp file + rename + fsync).

    Raises
    ------
    StorageError
        If write fails
    """
    try:
        if create_dirs and not file_path.parent.exists():
            file_path.parent.mkdir(parents=True, exist_ok=True)

        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=file_path.parent,
            prefix=f".{file_path.name}.tmp",
            delete=False,
        ) as tmp_file:
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            tmp_path = Path(tmp_file.name)

        os.replace(tmp_path, file_path)

        dir_fd = os.open(file_path.parent, os.O_RDONLY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)

    except OSError as exc:
        raise StorageError(f"Atomic write failed for {file_path}: {exc}") from exc


@dataclass
class SnapshotStore:
    """Reads and writes the two snapshots in ``data_dir``."""

    data_dir: Path

    def __post_init__(self) -> None:
        if isinstance(self.data_dir, str):
            self.data_dir = Path(self.data_dir)
        self.data_dir = self.data_dir.expanduser()

    @property
    def entries_path(self) -> Path:
        return self.data_dir / f"{ENTRIES_KEY}.json"

    @property
    def settings_path(self) -> Path:
        return self.data_dir / f"{SETTINGS_KEY}.json"

    def _read_json(self, path: Path) -> Any:
        """Parsed file content, or None when the file is missing or blank.

        Malformed JSON is not repaired.
        """
        if not path.exists():
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {path}: {exc}") from exc
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt snapshot {path}: {exc}") from exc

    def _write_json(self, path: Path, data: Any) -> None:
        payload = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        atomic_write(path, payload)

    def load_entries(self) -> list[LogEntry]:
        raw = self._read_json(self.entries_path)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StorageError(f"Corrupt snapshot {self.entries_path}: expected a list of entries")
        try:
            return [LogEntry.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageError(f"Corrupt entry in {self.entries_path}: {exc}") from exc

    def save_entries(self, entries: list[LogEntry]) -> None:
        self._write_json(self.entries_path, [e.to_dict() for e in entries])
        log.debug("Saved entries snapshot", count=len(entries), path=str(self.entries_path))

    def load_settings(self) -> UserSettings:
        """Stored settings merged over the defaults."""
        raw = self._read_json(self.settings_path)
        if raw is not None and not isinstance(raw, dict):
            raise StorageError(f"Corrupt snapshot {self.settings_path}: expected an object")
        try:
            return merge_settings(raw)
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageError(f"Corrupt settings in {self.settings_path}: {exc}") from exc

    def save_settings(self, settings: UserSettings) -> None:
        self._write_json(self.settings_path, settings.to_dict())
        log.debug("Saved settings snapshot", path=str(self.settings_path))


def read_import_file(path: Path) -> list[LogEntry]:
    """Entries from an import file: a JSON list or ``{"entries": [...]}``.

    Raises
    ------
    StorageError
        If the file cannot be read or does not hold entries
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise StorageError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise StorageError(f"Invalid JSON in {path}: {exc}") from exc

    if isinstance(raw, dict):
        raw = raw.get("entries")
    if not isinstance(raw, list):
        raise StorageError(f"{path} must hold a list of entries")

    try:
        return [LogEntry.from_dict(item) for item in raw]
    except (KeyError, TypeError, ValueError) as exc:
        raise StorageError(f"Invalid entry in {path}: {exc}") from exc
