"""Logging configuration for Hetzner Traffic Guard.

The bot runs discord.py with ``log_handler=None``, so the library loggers
(discord, apscheduler) are attached to the same handlers here.
"""

import logging
import sys
from datetime import datetime

from config import LIBRARY_LOG_LEVEL, LOG_DIR, LOG_LEVEL

LIBRARY_LOGGERS = ("discord", "apscheduler")


def _level(name: str, default: int) -> int:
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logging() -> logging.Logger:
    """Set up the app and library loggers to log to a dated file and stdout."""
    handlers: list[logging.Handler] = []

    # File handler - dated log file
    log_file = LOG_DIR / f"{datetime.now().strftime('%Y-%m-%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    handlers.append(file_handler)

    # Console handler - containers read stdout even without a tty
    if sys.stdout is not None:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%H:%M:%S"
        ))
        handlers.append(console_handler)

    levels = {"traffic_guard": _level(LOG_LEVEL, logging.INFO)}
    for name in LIBRARY_LOGGERS:
        levels[name] = _level(LIBRARY_LOG_LEVEL, logging.WARNING)

    for name, level in levels.items():
        target = logging.getLogger(name)
        target.setLevel(level)
        target.handlers.clear()
        for handler in handlers:
            target.addHandler(handler)

    return logging.getLogger("traffic_guard")


# Global logger instance
logger = setup_logging()
