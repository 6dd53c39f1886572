"""Logging configuration.

Only the tradejournal package logger gets a handler. Sync passes and
auto-closes log under tradejournal.services.*, so their level follows
Settings.log_level while library loggers stay at their own defaults.
"""

import logging
import sys
from typing import Optional

from tradejournal.config.settings import Settings, get_settings

PACKAGE_LOGGER = "tradejournal"

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Per-statement and per-request chatter
QUIET_LOGGERS = ("sqlalchemy.engine", "aiohttp.access", "aiohttp.client", "uvicorn.access")


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Attach a stdout handler to the package logger at the configured level.

    Calling it again (e.g. on a second app startup in the same process)
    updates the level without adding another handler.

    Raises:
        ValueError: If log_level is not a standard level name
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {settings.log_level!r}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if not any(h.get_name() == PACKAGE_LOGGER for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(PACKAGE_LOGGER)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logger
