"""Editing operations on UserSettings.

Every operation returns a new ``UserSettings``; callers persist the result
as a whole snapshot.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Any, Sequence, TypeVar

from .models import (
    DAY_PART_NAMES,
    DEFAULT_INTAKE_CATEGORIES,
    NONE_CATEGORY_ID,
    OTHER_CATEGORY_ID,
    EntryType,
    IntakeCategory,
    QuickButton,
    Sex,
    Theme,
    TimeRange,
    UserSettings,
)
from .validation import is_valid_time_of_day

__all__ = [
    "PreferenceError",
    "add_intake_category",
    "add_quick_button",
    "merge_settings",
    "move_intake_category",
    "move_item",
    "move_quick_button",
    "remove_intake_category",
    "remove_quick_button",
    "set_day_part",
    "set_preference",
]

T = TypeVar("T")
SENTINEL_CATEGORY_IDS = (NONE_CATEGORY_ID, OTHER_CATEGORY_ID)


class PreferenceError(Exception):
    """Raised when a settings edit is not allowed."""

    pass


def move_item(items: Sequence[T], from_index: int, to_index: int) -> list[T]:
    """Move one element, keeping the relative order of the rest.

    Raises
    ------
    IndexError
        If either index is out of range
    """
    result = list(items)
    if not (0 <= from_index < len(result)) or not (0 <= to_index < len(result)):
        raise IndexError(f"Cannot move item {from_index} -> {to_index} in list of {len(result)}")
    item = result.pop(from_index)
    result.insert(to_index, item)
    return result


def add_intake_category(settings: UserSettings, label: str) -> UserSettings:
    """Add a deletable category just before the "other" sentinel."""
    label = label.strip()
    if not label:
        raise PreferenceError("Category label cannot be empty")

    category = IntakeCategory(id=str(uuid.uuid4()), label=label, is_deletable=True)
    categories = list(settings.intake_categories)
    other_index = next((i for i, c in enumerate(categories) if c.id == OTHER_CATEGORY_ID), None)
    if other_index is None:
        categories.append(category)
    else:
        categories.insert(other_index, category)
    return replace(settings, intake_categories=tuple(categories))


def remove_intake_category(settings: UserSettings, category_id: str) -> UserSettings:
    category = next((c for c in settings.intake_categories if c.id == category_id), None)
    if category is None:
        raise PreferenceError(f"Unknown intake category: {category_id}")
    if not category.is_deletable or category.id in SENTINEL_CATEGORY_IDS:
        raise PreferenceError(f"Category '{category.label}' cannot be removed")
    return replace(
        settings,
        intake_categories=tuple(c for c in settings.intake_categories if c.id != category_id),
    )


def move_intake_category(settings: UserSettings, from_index: int, to_index: int) -> UserSettings:
    return replace(settings, intake_categories=tuple(move_item(settings.intake_categories, from_index, to_index)))


def add_quick_button(settings: UserSettings, entry_type: EntryType | str, label: str, amount: int) -> UserSettings:
    label = label.strip()
    if not label:
        raise PreferenceError("Button label cannot be empty")
    button = QuickButton(id=str(uuid.uuid4()), type=EntryType(entry_type), label=label, amount=int(amount))
    return replace(settings, quick_buttons=(*settings.quick_buttons, button))


def remove_quick_button(settings: UserSettings, button_id: str) -> UserSettings:
    if not any(b.id == button_id for b in settings.quick_buttons):
        raise PreferenceError(f"Unknown quick button: {button_id}")
    return replace(settings, quick_buttons=tuple(b for b in settings.quick_buttons if b.id != button_id))


def move_quick_button(settings: UserSettings, from_index: int, to_index: int) -> UserSettings:
    return replace(settings, quick_buttons=tuple(move_item(settings.quick_buttons, from_index, to_index)))


def set_day_part(settings: UserSettings, part: str, start: str, end: str) -> UserSettings:
    """Change one day-part window.

    Overlaps and gaps between windows are allowed.
    """
    if part not in DAY_PART_NAMES:
        raise PreferenceError(f"Unknown day part: {part} (expected one of {', '.join(DAY_PART_NAMES)})")
    for value in (start, end):
        if not is_valid_time_of_day(value):
            raise PreferenceError(f"Invalid time {value!r}, expected HH:mm")
    day_parts = replace(settings.day_parts, **{part: TimeRange(start, end)})
    return replace(settings, day_parts=day_parts)


SCALAR_PREFERENCES: dict[str, Any] = {
    "default_water_amount": int,
    "default_urine_amount": int,
    "amount_increment": int,
    "age": int,
    "theme": Theme,
    "sex": Sex,
}


def set_preference(settings: UserSettings, key: str, value: str) -> UserSettings:
    """Change one scalar preference from its text form.

    Keys may be written as ``default-water-amount`` or ``default_water_amount``.
    Numbers must be non-negative; theme and sex take their enum names.
    """
    name = key.strip().replace("-", "_").lower()
    convert = SCALAR_PREFERENCES.get(name)
    if convert is None:
        raise PreferenceError(f"Unknown setting: {key} (expected one of {', '.join(SCALAR_PREFERENCES)})")

    raw = value.strip()
    try:
        parsed = convert(raw) if convert is int else convert(raw.upper())
    except ValueError as exc:
        raise PreferenceError(f"Invalid value for {key}: {value!r}") from exc

    if convert is int and parsed < 0:
        raise PreferenceError(f"{key} cannot be negative")
    return replace(settings, **{name: parsed})


def merge_settings(stored: dict[str, Any] | None) -> UserSettings:
    """Merge a stored snapshot over the defaults.

    Fields missing from older snapshots are backfilled; stored values win.
    The "none" and "other" categories are always present and never
    deletable.
    """
    merged = UserSettings().to_dict()
    if stored:
        merged.update({key: value for key, value in stored.items() if key in merged})
    if merged.get("intakeCategories") is None:
        merged["intakeCategories"] = [c.to_dict() for c in DEFAULT_INTAKE_CATEGORIES]
    settings = UserSettings.from_dict(merged)
    return replace(settings, intake_categories=_with_sentinels(settings.intake_categories))


def _with_sentinels(categories: Sequence[IntakeCategory]) -> tuple[IntakeCategory, ...]:
    """Force the sentinels to be undeletable; a missing "none" goes first, a missing "other" last."""
    result = [replace(c, is_deletable=False) if c.id in SENTINEL_CATEGORY_IDS else c for c in categories]
    present = {c.id for c in result}
    defaults = {c.id: c for c in DEFAULT_INTAKE_CATEGORIES}
    if NONE_CATEGORY_ID not in present:
        result.insert(0, defaults[NONE_CATEGORY_ID])
    if OTHER_CATEGORY_ID not in present:
        result.append(defaults[OTHER_CATEGORY_ID])
    return tuple(result)
