"""Application configuration and secrets.

Loads configuration from a .env file and the environment and provides typed
access to settings. User preferences (default amounts, categories, day
parts) are not configuration; they live in the settings snapshot.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo

__all__ = [
    "ConfigError",
    "DEFAULT_DATA_DIR",
    "Settings",
    "load_env_file",
    "load_settings",
]

DEFAULT_DATA_DIR = Path("~/.config/aquaflow")
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass
class Settings:
    """Centralized settings for AquaFlow.

    Attributes
    ----------
    data_dir : Path
        Directory holding the entry and settings snapshots
    timezone : str | None
        IANA zone for local days (None = machine zone)
    log_level : str
        Logging level
    log_dir : Path | None
        Directory for JSONL logs (console only when unset)
    gemini_api_key : str
        API key for the insights model (insights disabled when empty)
    gemini_model : str
        Model name
    gemini_base_url : str
        API root
    llm_timeout : float
        Request timeout in seconds
    """

    data_dir: Path = DEFAULT_DATA_DIR
    timezone: str | None = None

    # Logging
    log_level: str = "INFO"
    log_dir: Path | None = None

    # Insights model
    gemini_api_key: str = ""
    gemini_model: str = "gemini-3-pro-preview"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    llm_timeout: float = 60.0

    def __post_init__(self):
        """Validate settings after initialization."""
        if isinstance(self.data_dir, str):
            self.data_dir = Path(self.data_dir)
        self.data_dir = self.data_dir.expanduser()

        if self.log_dir and isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)

        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except Exception as exc:
                raise ConfigError(
                    f"Unknown timezone {self.timezone!r}. "
                    "Set AQUAFLOW_TZ to an IANA name such as Europe/Brussels"
                ) from exc

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"AQUAFLOW_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

        if self.llm_timeout <= 0:
            raise ConfigError("AQUAFLOW_LLM_TIMEOUT must be a positive number of seconds")

    @property
    def insights_enabled(self) -> bool:
        return bool(self.gemini_api_key)

    @classmethod
    def from_env(cls, env_file: Path | str | None = None) -> Settings:
        """Load settings from environment.

        Loads from .env file if present, otherwise from os.environ.

        Raises
        ------
        ConfigError
            If settings are invalid
        """
        if env_file is None:
            env_file = Path(".env")

        if isinstance(env_file, str):
            env_file = Path(env_file)

        if env_file.exists():
            load_env_file(env_file)

        try:
            return cls(
                data_dir=Path(os.environ.get("AQUAFLOW_DATA_DIR", str(DEFAULT_DATA_DIR))),
                timezone=os.environ.get("AQUAFLOW_TZ") or None,
                log_level=os.environ.get("AQUAFLOW_LOG_LEVEL", "INFO"),
                log_dir=Path(os.environ["AQUAFLOW_LOG_DIR"]) if os.environ.get("AQUAFLOW_LOG_DIR") else None,
                gemini_api_key=os.environ.get("GEMINI_API_KEY", ""),
                gemini_model=os.environ.get("GEMINI_MODEL", "gemini-3-pro-preview"),
                gemini_base_url=os.environ.get("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"),
                llm_timeout=float(os.environ.get("AQUAFLOW_LLM_TIMEOUT", "60.0")),
            )

        except ValueError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_env_file(env_file: Path) -> None:
    """Load environment variables from .env file.

    Variables already set in the environment are kept.
    """
    with open(env_file, encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()

                if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
                    value = value[1:-1]

                os.environ.setdefault(key, value)


def load_settings(env_file: Path | str | None = None) -> Settings:
    """Load settings from .env and the environment."""
    return Settings.from_env(env_file)
