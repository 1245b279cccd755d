"""Logging setup shared by the web app and maintenance tasks."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(name: str = "worldclock", level: str | int | None = None) -> logging.Logger:
    """Configure logging for the application if it is not already configured."""

    logger = logging.getLogger(name)
    if level is None:
        from worldclock.config.settings import get_settings

        level = get_settings().log_level
    logger.setLevel(level if isinstance(level, int) else getattr(logging, str(level).upper(), logging.INFO))
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    # Avoid duplicate logging from child loggers
    logger.propagate = False
    return logger
