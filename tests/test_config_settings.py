"""
Tests for src/config/settings.py

These tests verify settings load from the environment, validate eagerly, and
are cached by get_settings() until reset_settings() is called.
"""

import pytest

from src.config.settings import Settings, get_settings, reset_settings


def test_settings_defaults():
    """Test defaults when no environment variables are set."""
    settings = Settings.from_env()

    assert settings.default_timezone == "UTC"
    assert settings.log_level == "WARNING"


def test_settings_from_env(monkeypatch):
    """Test values are read from DATE_TASKS_* variables."""
    monkeypatch.setenv("DATE_TASKS_DEFAULT_TZ", "Europe/Berlin")
    monkeypatch.setenv("DATE_TASKS_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.default_timezone == "Europe/Berlin"
    # Level names are normalised to upper case
    assert settings.log_level == "DEBUG"


def test_settings_unknown_timezone_raises(monkeypatch):
    """Test a misspelled zone fails at load time."""
    monkeypatch.setenv("DATE_TASKS_DEFAULT_TZ", "Mars/Olympus_Mons")

    with pytest.raises(ValueError, match="Unknown timezone"):
        Settings.from_env()


def test_settings_empty_timezone_raises():
    """Test an empty zone name is rejected."""
    with pytest.raises(ValueError, match="must not be empty"):
        Settings(default_timezone="")


def test_settings_invalid_log_level_raises():
    """Test an unknown log level is rejected."""
    with pytest.raises(ValueError, match="DATE_TASKS_LOG_LEVEL"):
        Settings(log_level="LOUD")


def test_settings_are_frozen():
    """Test settings cannot be mutated after creation."""
    settings = Settings()

    with pytest.raises(AttributeError):
        settings.default_timezone = "Asia/Tokyo"


def test_get_settings_is_cached_until_reset(monkeypatch):
    """Test get_settings() caches, and reset_settings() forces a reload."""
    first = get_settings()

    monkeypatch.setenv("DATE_TASKS_DEFAULT_TZ", "Asia/Tokyo")
    assert get_settings() is first
    assert get_settings().default_timezone == "UTC"

    reset_settings()
    assert get_settings().default_timezone == "Asia/Tokyo"


def test_default_timezone_from_env_flows_into_parsing(monkeypatch):
    """Test parsers fall back to the environment-configured zone."""
    from src.utils.dates import parse_iso8601

    monkeypatch.setenv("DATE_TASKS_DEFAULT_TZ", "Asia/Tokyo")
    reset_settings()

    result = parse_iso8601("2016-01-19T09:00:00")

    assert result == parse_iso8601("2016-01-19T00:00:00Z")
