"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import src...' works, and gives
every test fresh default settings.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.config.settings import reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Clear DATE_TASKS_* variables (a local .env may set them) and the settings cache."""
    monkeypatch.delenv("DATE_TASKS_DEFAULT_TZ", raising=False)
    monkeypatch.delenv("DATE_TASKS_LOG_LEVEL", raising=False)
    reset_settings()
    yield
    reset_settings()
