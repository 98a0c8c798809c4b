"""Domain model: log entries, intake categories, quick buttons, settings.

Records serialize to the camelCase JSON shape used by the stored snapshots
and by import files. Optional keys are omitted when unset; unknown keys are
ignored on read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

__all__ = [
    "DAY_PART_NAMES",
    "DEFAULT_INTAKE_CATEGORIES",
    "DEFAULT_QUICK_BUTTONS",
    "DayParts",
    "EntryType",
    "IntakeCategory",
    "LogEntry",
    "NONE_CATEGORY_ID",
    "OTHER_CATEGORY_ID",
    "QuickButton",
    "Sex",
    "Theme",
    "TimeRange",
    "Urgency",
    "UserSettings",
]

NONE_CATEGORY_ID = "none"
OTHER_CATEGORY_ID = "other"
DAY_PART_NAMES = ("night", "morning", "afternoon", "evening")


class EntryType(str, Enum):
    WATER = "WATER"
    URINE = "URINE"
    NOTE = "NOTE"

    @property
    def display_name(self) -> str:
        """Label used in exports and listings."""
        return {"WATER": "Intake", "URINE": "Urine", "NOTE": "Note"}[self.value]


class Urgency(str, Enum):
    EMPTY = "EMPTY"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Theme(str, Enum):
    LIGHT = "LIGHT"
    DARK = "DARK"
    SYSTEM = "SYSTEM"


class Sex(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"
    UNSPECIFIED = "UNSPECIFIED"


@dataclass(frozen=True)
class LogEntry:
    """One logged event.

    Attributes
    ----------
    id : str
        Opaque unique key
    type : EntryType
        WATER (intake), URINE (output) or NOTE
    amount : int
        Volume in ml, 0 for notes
    timestamp : str
        ISO-8601 instant
    notes : str
        Free text, required for NOTE entries
    intake_type_id : str | None
        IntakeCategory id, WATER only
    urgency : Urgency | None
        URINE only
    """

    id: str
    type: EntryType
    amount: int
    timestamp: str
    notes: str = ""
    intake_type_id: str | None = None
    urgency: Urgency | None = None

    @property
    def is_volume(self) -> bool:
        """True for entries that carry a volume (WATER and URINE)."""
        return self.type in (EntryType.WATER, EntryType.URINE)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "amount": self.amount,
            "timestamp": self.timestamp,
            "notes": self.notes,
        }
        if self.intake_type_id is not None:
            data["intakeTypeId"] = self.intake_type_id
        if self.urgency is not None:
            data["urgency"] = self.urgency.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LogEntry:
        """Build an entry from its stored/imported shape.

        Raises
        ------
        KeyError
            If id, type or timestamp is missing
        ValueError
            If type or urgency is not a known value
        """
        urgency = data.get("urgency")
        return cls(
            id=str(data["id"]),
            type=EntryType(data["type"]),
            amount=int(data.get("amount") or 0),
            timestamp=str(data["timestamp"]),
            notes=data.get("notes") or "",
            intake_type_id=data.get("intakeTypeId"),
            urgency=Urgency(urgency) if urgency else None,
        )


@dataclass(frozen=True)
class IntakeCategory:
    id: str
    label: str
    is_deletable: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "isDeletable": self.is_deletable}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IntakeCategory:
        return cls(
            id=str(data["id"]),
            label=str(data.get("label", "")),
            is_deletable=bool(data.get("isDeletable", True)),
        )


@dataclass(frozen=True)
class QuickButton:
    """Preset for one-tap entry creation."""

    id: str
    type: EntryType
    label: str
    amount: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "type": self.type.value, "label": self.label, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QuickButton:
        return cls(
            id=str(data["id"]),
            type=EntryType(data["type"]),
            label=str(data.get("label", "")),
            amount=int(data.get("amount") or 0),
        )


@dataclass(frozen=True)
class TimeRange:
    """Inclusive wall-clock window, both ends "HH:mm"."""

    start: str
    end: str

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class DayParts:
    night: TimeRange = TimeRange("00:00", "05:59")
    morning: TimeRange = TimeRange("06:00", "11:59")
    afternoon: TimeRange = TimeRange("12:00", "17:59")
    evening: TimeRange = TimeRange("18:00", "23:59")

    def items(self) -> list[tuple[str, TimeRange]]:
        """Named windows in matching order."""
        return [(name, getattr(self, name)) for name in DAY_PART_NAMES]

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {name: window.to_dict() for name, window in self.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DayParts:
        defaults = cls()
        parts = {}
        for name in DAY_PART_NAMES:
            raw = data.get(name) or {}
            fallback = getattr(defaults, name)
            parts[name] = TimeRange(raw.get("start", fallback.start), raw.get("end", fallback.end))
        return cls(**parts)


DEFAULT_INTAKE_CATEGORIES: tuple[IntakeCategory, ...] = (
    IntakeCategory(NONE_CATEGORY_ID, "None", is_deletable=False),
    IntakeCategory("water", "Water"),
    IntakeCategory("coffee", "Coffee"),
    IntakeCategory("tea", "Tea"),
    IntakeCategory("juice", "Juice"),
    IntakeCategory("milk", "Milk"),
    IntakeCategory("soda", "Soda"),
    IntakeCategory("beer", "Beer"),
    IntakeCategory("wine", "Wine"),
    IntakeCategory("spirits", "Spirits"),
    IntakeCategory(OTHER_CATEGORY_ID, "Other", is_deletable=False),
)

DEFAULT_QUICK_BUTTONS: tuple[QuickButton, ...] = (
    QuickButton("1", EntryType.WATER, "Glass", 250),
    QuickButton("2", EntryType.WATER, "Big Glass", 350),
    QuickButton("3", EntryType.WATER, "Bottle", 500),
    QuickButton("4", EntryType.URINE, "Small", 200),
    QuickButton("5", EntryType.URINE, "Medium", 400),
    QuickButton("6", EntryType.URINE, "Large", 600),
)


@dataclass(frozen=True)
class UserSettings:
    """User preferences, replaced wholesale on save."""

    default_water_amount: int = 250
    default_urine_amount: int = 400
    amount_increment: int = 50
    theme: Theme = Theme.SYSTEM
    age: int = 30
    sex: Sex = Sex.UNSPECIFIED
    intake_categories: tuple[IntakeCategory, ...] = DEFAULT_INTAKE_CATEGORIES
    quick_buttons: tuple[QuickButton, ...] = DEFAULT_QUICK_BUTTONS
    day_parts: DayParts = field(default_factory=DayParts)

    def category_label(self, category_id: str | None) -> str | None:
        for category in self.intake_categories:
            if category.id == category_id:
                return category.label
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "defaultWaterAmount": self.default_water_amount,
            "defaultUrineAmount": self.default_urine_amount,
            "amountIncrement": self.amount_increment,
            "theme": self.theme.value,
            "age": self.age,
            "sex": self.sex.value,
            "intakeCategories": [c.to_dict() for c in self.intake_categories],
            "quickButtons": [b.to_dict() for b in self.quick_buttons],
            "dayParts": self.day_parts.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserSettings:
        """Build settings from a complete stored shape.

        Use ``preferences.merge_settings`` for partial or older snapshots.
        """
        return cls(
            default_water_amount=int(data["defaultWaterAmount"]),
            default_urine_amount=int(data["defaultUrineAmount"]),
            amount_increment=int(data["amountIncrement"]),
            theme=Theme(data["theme"]),
            age=int(data["age"]),
            sex=Sex(data["sex"]),
            intake_categories=tuple(IntakeCategory.from_dict(c) for c in data["intakeCategories"]),
            quick_buttons=tuple(QuickButton.from_dict(b) for b in data["quickButtons"]),
            day_parts=DayParts.from_dict(data["dayParts"]),
        )
