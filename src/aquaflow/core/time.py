"""Time and timezone utilities for AquaFlow.

Provides consistent timezone handling across the tracker:
- Timestamps are stored as ISO-8601 instants (UTC "Z" or with offset)
- Every "day" and "HH:mm" comparison happens in the configured local zone
- The local zone defaults to the machine zone and can be overridden
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from tzlocal import get_localzone_name

__all__ = [
    "TimeConfig",
    "format_export_timestamp",
    "format_utc_iso8601",
    "get_current_time",
    "get_default_timezone",
    "get_default_timezone_name",
    "local_date",
    "local_time_of_day",
    "parse_local_datetime",
    "parse_timestamp",
    "resolve_timezone_name",
    "set_default_timezone",
    "to_local",
]


class TimeConfig:
    """Global time configuration."""

    _default_timezone: str | None = None

    @classmethod
    def get_default_timezone_name(cls) -> str:
        """Get default timezone name.

        Falls back to the machine's zone (and to UTC when it cannot be
        determined) until one is set explicitly.

        Returns
        -------
        str
            Timezone name (e.g., "Europe/Brussels")
        """
        if cls._default_timezone:
            return cls._default_timezone
        return get_localzone_name() or "UTC"

    @classmethod
    def set_default_timezone_name(cls, timezone_name: str | None) -> None:
        """Set default timezone.

        Parameters
        ----------
        timezone_name
            IANA timezone name, or None to go back to the machine zone

        Raises
        ------
        ValueError
            If timezone is invalid
        """
        if timezone_name is not None:
            try:
                ZoneInfo(timezone_name)
            except Exception as exc:
                raise ValueError(f"Invalid timezone: {timezone_name}") from exc

        cls._default_timezone = timezone_name


def get_default_timezone_name() -> str:
    return TimeConfig.get_default_timezone_name()


def get_default_timezone() -> ZoneInfo:
    """Get default timezone object."""
    return ZoneInfo(TimeConfig.get_default_timezone_name())


def set_default_timezone(timezone_name: str | None) -> None:
    """Set default timezone for the process.

    Raises
    ------
    ValueError
        If timezone is invalid
    """
    TimeConfig.set_default_timezone_name(timezone_name)


def resolve_timezone_name(timezone_str: str | None) -> str:
    return timezone_str or TimeConfig.get_default_timezone_name()


def get_current_time(timezone_str: str | None = None) -> datetime:
    """Get current time in the given (or default) timezone."""
    return datetime.now(ZoneInfo(resolve_timezone_name(timezone_str)))


def parse_timestamp(value: str, timezone_str: str | None = None) -> datetime:
    """Parse a stored ISO-8601 timestamp into an aware datetime.

    Accepts a trailing "Z". A naive value is taken as local wall time in
    the given (or default) timezone.

    Raises
    ------
    ValueError
        If the value is not ISO-8601
    """
    dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=ZoneInfo(resolve_timezone_name(timezone_str)))
    return dt


def parse_local_datetime(value: str, timezone_str: str | None = None) -> datetime:
    """Parse user input such as "2025-03-01 14:30" or "2025-03-01T14:30".

    Values without an offset are interpreted in the local zone.
    """
    return parse_timestamp(value.replace(" ", "T", 1), timezone_str)


def format_utc_iso8601(dt: datetime) -> str:
    """Format an aware datetime the way entries store it.

    Example: 2025-03-01T13:30:00.000Z
    """
    utc = dt.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def to_local(value: str | datetime, timezone_str: str | None = None) -> datetime:
    if isinstance(value, str):
        value = parse_timestamp(value, timezone_str)
    return value.astimezone(ZoneInfo(resolve_timezone_name(timezone_str)))


def local_date(value: str | datetime, timezone_str: str | None = None) -> date:
    """Calendar day of an instant in the local zone."""
    return to_local(value, timezone_str).date()


def local_time_of_day(value: str | datetime, timezone_str: str | None = None) -> str:
    """Local wall-clock time of an instant as "HH:mm"."""
    return to_local(value, timezone_str).strftime("%H:%M")


def format_export_timestamp(value: str | datetime, timezone_str: str | None = None) -> str:
    """Local time as "yyyy-MM-dd HH:mm:ss" for CSV export."""
    return to_local(value, timezone_str).strftime("%Y-%m-%d %H:%M:%S")
