"""Shared fixtures: pinned timezone, entry factory and clean logging."""

from __future__ import annotations

import itertools

import pytest
from loguru import logger

from aquaflow.core.models import EntryType, LogEntry, Urgency
from aquaflow.core.time import set_default_timezone

TEST_TIMEZONE = "America/New_York"


@pytest.fixture(autouse=True)
def pinned_timezone():
    """Every test runs with New York as the local zone."""
    set_default_timezone(TEST_TIMEZONE)
    yield TEST_TIMEZONE
    set_default_timezone(None)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks added during a test (they may point at captured streams)."""
    yield
    logger.remove()


@pytest.fixture
def make_entry():
    """Factory for LogEntry objects with sequential ids."""
    counter = itertools.count(1)

    def _make(
        entry_type: EntryType | str = EntryType.WATER,
        amount: int = 250,
        timestamp: str = "2025-03-04T14:00:00.000Z",
        notes: str = "",
        entry_id: str | None = None,
        intake_type_id: str | None = None,
        urgency: Urgency | None = None,
    ) -> LogEntry:
        entry_type = EntryType(entry_type)
        if entry_type == EntryType.WATER and intake_type_id is None:
            intake_type_id = "none"
        if entry_type == EntryType.URINE and urgency is None:
            urgency = Urgency.EMPTY
        return LogEntry(
            id=entry_id or f"entry-{next(counter)}",
            type=entry_type,
            amount=amount,
            timestamp=timestamp,
            notes=notes,
            intake_type_id=intake_type_id,
            urgency=urgency,
        )

    return _make
