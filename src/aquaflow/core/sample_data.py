"""Synthetic entries for trying the reports without real data."""

from __future__ import annotations

import random
import uuid
from datetime import datetime, timedelta
from typing import Iterable

from .models import EntryType, LogEntry
from .time import format_utc_iso8601

__all__ = [
    "SAMPLE_MARKER",
    "generate_sample_entries",
    "remove_sample_entries",
]

SAMPLE_MARKER = "DEV_RANDOM"


def _at(day: datetime, hour: int, minute: int) -> str:
    return format_utc_iso8601(day.replace(hour=hour, minute=minute, second=0, microsecond=0))


def generate_sample_entries(
    now: datetime,
    days: int = 30,
    rng: random.Random | None = None,
) -> list[LogEntry]:
    """Generate ``days`` days of intake and output ending at ``now``'s day.

    Per day: 4-6 intakes (07:00-20:59, 200-499 ml) and 3-5 voids
    (08:00-22:59, 150-549 ml), all marked with ``SAMPLE_MARKER``.
    ``now`` must be timezone-aware; hours are wall-clock in its zone.
    """
    rng = rng or random.Random()
    samples: list[LogEntry] = []

    for offset in range(days):
        day = now - timedelta(days=offset)

        for _ in range(4 + rng.randrange(3)):
            samples.append(
                LogEntry(
                    id=str(uuid.uuid4()),
                    type=EntryType.WATER,
                    amount=200 + rng.randrange(300),
                    timestamp=_at(day, 7 + rng.randrange(14), rng.randrange(60)),
                    notes=SAMPLE_MARKER,
                    intake_type_id="water",
                )
            )

        for _ in range(3 + rng.randrange(3)):
            samples.append(
                LogEntry(
                    id=str(uuid.uuid4()),
                    type=EntryType.URINE,
                    amount=150 + rng.randrange(400),
                    timestamp=_at(day, 8 + rng.randrange(15), rng.randrange(60)),
                    notes=SAMPLE_MARKER,
                )
            )

    return samples


def remove_sample_entries(entries: Iterable[LogEntry]) -> list[LogEntry]:
    return [e for e in entries if e.notes != SAMPLE_MARKER]
