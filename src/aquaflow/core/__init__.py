"""Core domain of AquaFlow: entries, settings, validation and time."""

from .models import (
    DAY_PART_NAMES,
    DEFAULT_INTAKE_CATEGORIES,
    DEFAULT_QUICK_BUTTONS,
    NONE_CATEGORY_ID,
    OTHER_CATEGORY_ID,
    DayParts,
    EntryType,
    IntakeCategory,
    LogEntry,
    QuickButton,
    Sex,
    Theme,
    TimeRange,
    Urgency,
    UserSettings,
)
from .preferences import PreferenceError, merge_settings, move_item
from .sample_data import SAMPLE_MARKER, generate_sample_entries, remove_sample_entries
from .time import (
    TimeConfig,
    get_current_time,
    get_default_timezone,
    local_date,
    local_time_of_day,
    parse_timestamp,
    set_default_timezone,
)
from .validation import ValidationError, ValidationResult, build_entry, validate_entry_fields

__all__ = [
    # Models
    "DAY_PART_NAMES",
    "DEFAULT_INTAKE_CATEGORIES",
    "DEFAULT_QUICK_BUTTONS",
    "NONE_CATEGORY_ID",
    "OTHER_CATEGORY_ID",
    "DayParts",
    "EntryType",
    "IntakeCategory",
    "LogEntry",
    "QuickButton",
    "Sex",
    "Theme",
    "TimeRange",
    "Urgency",
    "UserSettings",
    # Preferences
    "PreferenceError",
    "merge_settings",
    "move_item",
    # Sample data
    "SAMPLE_MARKER",
    "generate_sample_entries",
    "remove_sample_entries",
    # Time
    "TimeConfig",
    "get_current_time",
    "get_default_timezone",
    "local_date",
    "local_time_of_day",
    "parse_timestamp",
    "set_default_timezone",
    # Validation
    "ValidationError",
    "ValidationResult",
    "build_entry",
    "validate_entry_fields",
]
