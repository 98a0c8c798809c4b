"""Tests for the entry journal (the single writer of entries)."""

from __future__ import annotations

import random
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from aquaflow.core.models import EntryType, Urgency
from aquaflow.core.sample_data import generate_sample_entries
from aquaflow.core.validation import ValidationError
from aquaflow.storage import EntryJournal, EntryNotFoundError, SnapshotStore


@pytest.fixture
def journal(tmp_path: Path) -> EntryJournal:
    return EntryJournal(SnapshotStore(tmp_path))


def reload(journal: EntryJournal) -> EntryJournal:
    return EntryJournal(SnapshotStore(journal.store.data_dir))


def test_add_persists_sorted(journal: EntryJournal):
    older = journal.add("WATER", amount=250, timestamp="2025-02-10T14:00:00.000Z")
    newer = journal.add("URINE", amount=300, timestamp="2025-02-10T16:00:00.000Z", urgency="LOW")
    oldest = journal.add("NOTE", notes="Woke up", timestamp="2025-02-10T11:00:00.000Z")

    stored = reload(journal).list_entries()

    assert [e.id for e in stored] == [newer.id, older.id, oldest.id]
    assert stored[0].urgency == Urgency.LOW


def test_add_invalid_stores_nothing(journal: EntryJournal):
    with pytest.raises(ValidationError):
        journal.add("WATER", amount=0, timestamp="2025-02-10T14:00:00.000Z")

    assert not journal.store.entries_path.exists()
    assert journal.list_entries() == []


def test_list_limit(journal: EntryJournal):
    for hour in range(10, 15):
        journal.add("WATER", amount=100, timestamp=f"2025-02-10T{hour}:00:00.000Z")

    assert len(journal.list_entries(limit=2)) == 2
    assert len(journal.list_entries()) == 5


def test_update_keeps_id_and_resorts(journal: EntryJournal):
    first = journal.add("WATER", amount=250, timestamp="2025-02-10T14:00:00.000Z")
    second = journal.add("WATER", amount=250, timestamp="2025-02-10T15:00:00.000Z")

    updated = journal.update(first.id, "WATER", amount=500, timestamp="2025-02-10T18:00:00.000Z")

    assert updated.id == first.id
    assert [e.id for e in reload(journal).list_entries()] == [first.id, second.id]
    assert reload(journal).get(first.id).amount == 500


def test_update_can_change_type(journal: EntryJournal):
    entry = journal.add("WATER", amount=250, timestamp="2025-02-10T14:00:00.000Z", intake_type_id="tea")

    updated = journal.update(entry.id, "URINE", amount=250, timestamp=entry.timestamp)

    assert updated.type == EntryType.URINE
    assert updated.intake_type_id is None
    assert updated.urgency == Urgency.EMPTY


def test_update_unknown_id(journal: EntryJournal):
    with pytest.raises(EntryNotFoundError):
        journal.update("missing", "WATER", amount=1, timestamp="2025-02-10T14:00:00.000Z")


def test_delete(journal: EntryJournal):
    keep = journal.add("WATER", amount=250, timestamp="2025-02-10T14:00:00.000Z")
    drop = journal.add("URINE", amount=250, timestamp="2025-02-10T15:00:00.000Z")

    journal.delete(drop.id)

    assert [e.id for e in reload(journal).list_entries()] == [keep.id]
    with pytest.raises(EntryNotFoundError):
        journal.delete(drop.id)


def test_import_entries_counts_added(journal: EntryJournal, make_entry):
    existing = journal.add("WATER", amount=250, timestamp="2025-02-10T14:00:00.000Z")
    incoming = [
        make_entry(EntryType.WATER, 250, existing.timestamp, entry_id="dup-content"),
        make_entry(EntryType.URINE, 300, "2025-02-11T14:00:00.000Z", entry_id="new"),
        existing,
    ]

    assert journal.import_entries(incoming) == 1
    assert journal.import_entries(incoming) == 0
    assert {e.id for e in reload(journal).list_entries()} == {existing.id, "new"}


def test_sample_entries_round_trip(journal: EntryJournal):
    real = journal.add("WATER", amount=250, timestamp="2025-02-10T14:00:00.000Z")
    now = datetime(2025, 2, 20, 21, 0, tzinfo=ZoneInfo("America/New_York"))
    samples = generate_sample_entries(now, days=3, rng=random.Random(5))

    assert journal.bulk_add(samples) == len(samples)
    assert len(reload(journal).list_entries()) == len(samples) + 1

    assert journal.remove_sample_entries() == len(samples)
    assert [e.id for e in reload(journal).list_entries()] == [real.id]
