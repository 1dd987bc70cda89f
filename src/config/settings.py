"""
Configuration settings for the date utilities.

**Conceptual**: This module provides a strongly-typed configuration object that
loads from environment variables (via .env files). Settings are validated
at load time, so a misspelled timezone or log level fails immediately instead
of surfacing later as a wrong timestamp.

**What is configurable?**
  - The timezone used to interpret naive values (strings or datetimes that
    carry no UTC offset).
  - The log level used when configuring the loguru sink.

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load .env from project root (dev/local environments); a missing file is a no-op
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """
    Global settings for the date utilities.

    **Conceptual**: Date parsing has exactly one environment-dependent choice:
    which zone a naive value belongs to. JavaScript's Date picks the host's
    local zone, which makes results differ between machines. Here the choice
    is explicit and defaults to UTC, so results are reproducible unless the
    caller opts into another zone.

    **Usage pattern**:
      ```python
      from src.config.settings import Settings

      settings = Settings.from_env()
      parse_rfc2822("December 17, 1995 03:24:00", settings=settings)
      ```

    Attributes:
        default_timezone: IANA zone name used for naive values (default "UTC").
        log_level: Minimum loguru level for configure_logging() (default "WARNING").
    """
    default_timezone: str = "UTC"
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.default_timezone:
            raise ValueError(
                "DATE_TASKS_DEFAULT_TZ must not be empty. "
                "Use an IANA zone name such as 'UTC' or 'Europe/Berlin'."
            )
        try:
            ZoneInfo(self.default_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"Unknown timezone for DATE_TASKS_DEFAULT_TZ: {self.default_timezone!r}. "
                "Use an IANA zone name such as 'UTC' or 'Europe/Berlin'."
            )
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"DATE_TASKS_LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, "
                f"got: {self.log_level!r}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings from environment variables.

        **Environment variables**:
          - DATE_TASKS_DEFAULT_TZ (optional): zone for naive values. Defaults to "UTC".
          - DATE_TASKS_LOG_LEVEL (optional): loguru level name, case-insensitive.
            Defaults to "WARNING".

        Returns:
            Settings object with values loaded from environment.

        Raises:
            ValueError: If the timezone is unknown or the log level is invalid.

        Usage example:
            >>> # In .env file:
            >>> # DATE_TASKS_DEFAULT_TZ=Europe/Berlin
            >>>
            >>> settings = Settings.from_env()
            >>> print(settings.default_timezone)  # "Europe/Berlin"
        """
        default_timezone = os.getenv("DATE_TASKS_DEFAULT_TZ", "UTC").strip()
        log_level = os.getenv("DATE_TASKS_LOG_LEVEL", "WARNING").strip().upper()

        return cls(
            default_timezone=default_timezone,
            log_level=log_level,
        )


# Cached settings; loaded on first get_settings() call, not at import time.
# Tests can inject Settings(...) directly or call reset_settings().
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from environment on first call, then cached for reuse.
    Functions that accept a `settings` argument fall back to this when it is None.

    Returns:
        Global Settings singleton.

    Raises:
        ValueError: If the environment holds invalid values (see Settings.from_env).
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    **Testing pattern**:
      ```python
      def test_something(monkeypatch):
          monkeypatch.setenv("DATE_TASKS_DEFAULT_TZ", "Asia/Tokyo")
          reset_settings()
          assert get_settings().default_timezone == "Asia/Tokyo"
      ```

    Returns:
        None (side effect: clears global settings cache).
    """
    global _default_settings
    _default_settings = None
