"""Shared logging configuration helpers for the API process."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
# Driver loggers emit every statement at DEBUG, including bound parameters.
_DRIVER_LOGGERS = ("aiosqlite", "asyncpg", "sqlalchemy.engine")


def resolve_log_level(level: str) -> int:
    """Map a level name to its numeric value, falling back to INFO."""

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved = logging.getLevelName(normalized_level)
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(*, level: str) -> int:
    """Configure process logging and keep driver loggers at WARNING or above."""

    resolved_level = resolve_log_level(level)
    logging.basicConfig(
        level=resolved_level,
        format=_LOG_FORMAT,
    )
    for name in _DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))
    return resolved_level
