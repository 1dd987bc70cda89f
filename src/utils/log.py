"""
Logging setup built on loguru.

Library modules log through `from loguru import logger` and never configure
sinks themselves. Applications (or tests) call configure_logging() once to
replace loguru's default stderr handler with one at the configured level.
"""

import sys
from typing import Any, Optional

from loguru import logger

from src.config.settings import Settings, get_settings


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def configure_logging(settings: Optional[Settings] = None, sink: Any = sys.stderr) -> int:
    """
    Replace all loguru handlers with a single sink at the configured level.

    Args:
        settings: Settings to read log_level from. Defaults to get_settings().
        sink: Any loguru sink (stream, path, or callable). Defaults to stderr.

    Returns:
        The loguru handler id, usable with logger.remove(handler_id).
    """
    settings = settings or get_settings()

    logger.remove()
    return logger.add(sink, level=settings.log_level, format=LOG_FORMAT)
