"""Rotating file log kept next to the saved title.

Modules call log(); get_logger() is there for callers that want the
logging.Logger itself.
"""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from .profile import get_profile_dir

LOGGER_NAME = "savetabtitle"
_LOG_FILENAME = "savetabtitle.log"
_MAX_BYTES = 1 * 1024 * 1024  # 1 MB
_BACKUP_COUNT = 3

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the `savetabtitle` logger, attaching its file handler on first use.

    The handler writes `savetabtitle.log` in the profile directory, rolling
    over at 1MB with 3 backups. Without a writable profile directory the
    logger gets a NullHandler instead.
    """
    logger = logging.getLogger(name or LOGGER_NAME)
    if getattr(logger, "_savetabtitle_configured", False):
        return logger

    logger.setLevel(logging.DEBUG)
    try:
        handler = RotatingFileHandler(
            os.path.join(get_profile_dir(), _LOG_FILENAME),
            maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8",
        )
    except OSError:
        logger.addHandler(logging.NullHandler())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(handler)
        # Records stay in the file; the tray app has no console to echo to.
        logger.propagate = False
    logger._savetabtitle_configured = True
    return logger


def log(message, level: str = "info", name: Optional[str] = None) -> None:
    """Write one message to the log.

    `level` is a case-insensitive level name ('debug' .. 'critical', or
    'warn'); unknown names log at INFO. Non-string messages go through str().
    """
    lvl = _LEVELS.get((level or "info").lower(), logging.INFO)
    get_logger(name).log(lvl, str(message))


__all__ = ["get_logger", "log"]
