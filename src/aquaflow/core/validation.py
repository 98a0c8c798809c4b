"""Entry validation and normalization.

Invalid entries never reach storage; errors are surfaced to callers.
"""

from __future__ import annotations

import re
import uuid
from typing import Any

from .models import NONE_CATEGORY_ID, EntryType, LogEntry, Urgency
from .time import parse_timestamp

__all__ = [
    "HHMM_PATTERN",
    "ValidationError",
    "ValidationResult",
    "build_entry",
    "is_valid_time_of_day",
    "validate_entry_fields",
]

HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class ValidationError(Exception):
    """Raised when an entry fails validation.

    The attempted entry is not added.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class ValidationResult:
    """Result of entry validation."""

    def __init__(self, valid: bool, errors: list[str] | None = None) -> None:
        self.valid = valid
        self.errors = errors or []

    def __bool__(self) -> bool:
        return self.valid

    def __str__(self) -> str:
        if self.valid:
            return "Valid"
        return f"Invalid: {'; '.join(self.errors)}"

    def add_error(self, error: str) -> None:
        self.errors.append(error)
        self.valid = False


def is_valid_time_of_day(value: str) -> bool:
    return bool(HHMM_PATTERN.match(value))


def validate_entry_fields(
    entry_type: EntryType | str,
    amount: int | None,
    timestamp: str,
    notes: str = "",
) -> ValidationResult:
    """Check the submit rules for a new or edited entry.

    - WATER/URINE need an amount above zero
    - NOTE needs non-blank notes
    - the timestamp must be ISO-8601
    """
    result = ValidationResult(valid=True)

    try:
        entry_type = EntryType(entry_type)
    except ValueError:
        result.add_error(f"Unknown entry type: {entry_type}")
        return result

    if entry_type == EntryType.NOTE:
        if not (notes or "").strip():
            result.add_error("Notes are required for a note entry")
    elif amount is None or amount <= 0:
        result.add_error("Amount must be greater than 0")

    try:
        parse_timestamp(timestamp)
    except (TypeError, ValueError):
        result.add_error(f"Invalid timestamp: {timestamp!r}")

    return result


def build_entry(
    entry_type: EntryType | str,
    *,
    timestamp: str,
    amount: int | None = None,
    notes: str = "",
    intake_type_id: str | None = None,
    urgency: Urgency | str | None = None,
    entry_id: str | None = None,
) -> LogEntry:
    """Validate and normalize form input into a LogEntry.

    NOTE amounts are forced to 0, the intake category is kept only for
    WATER and urgency only for URINE.

    Raises
    ------
    ValidationError
        If the input breaks a submit rule
    """
    result = validate_entry_fields(entry_type, amount, timestamp, notes)
    if not result:
        raise ValidationError(str(result), result.errors)

    entry_type = EntryType(entry_type)
    fields: dict[str, Any] = {
        "id": entry_id or str(uuid.uuid4()),
        "type": entry_type,
        "amount": 0 if entry_type == EntryType.NOTE else int(amount or 0),
        "timestamp": timestamp,
        "notes": notes or "",
    }
    if entry_type == EntryType.WATER:
        fields["intake_type_id"] = intake_type_id or NONE_CATEGORY_ID
    if entry_type == EntryType.URINE:
        fields["urgency"] = Urgency(urgency) if urgency else Urgency.EMPTY

    return LogEntry(**fields)
