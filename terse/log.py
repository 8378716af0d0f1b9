"""Opt-in file logging.

The terminal belongs to the editor while it runs, so log records never go
to stderr. Logging stays silent unless a log file is configured through
``--log-file`` or the ``TERSE_LOG_FILE`` environment variable.
"""

from __future__ import annotations

import logging
import os

LOG_FILE_ENV = "TERSE_LOG_FILE"
LOG_LEVEL_ENV = "TERSE_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PACKAGE_LOGGER = "terse"


def resolve_level(name: str | None) -> int:
    """Map a level name to a ``logging`` level, defaulting to ``INFO``."""
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_file: str | None = None) -> logging.Handler | None:
    """Attach a file handler to the package logger when a path is configured.

    Returns the installed handler, or ``None`` when logging stays disabled.
    """
    path = log_file or os.environ.get(LOG_FILE_ENV, "").strip()
    if not path:
        return None

    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(resolve_level(os.environ.get(LOG_LEVEL_ENV)))
    logger.propagate = False
    return handler
