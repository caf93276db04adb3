"""
Logging for the register backend.

Every logger lives under the "cafepos" namespace and shares one stdout
handler, attached the first time a logger is requested. POS_LOG_LEVEL (or
LOG_LEVEL) sets the level. POS_ENV=production drops the timestamp, which the
hosting platform already adds.

Usage:
    from cafepos.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Order submitted")
"""

import logging
import os
import sys
from functools import cache

ROOT_LOGGER = "cafepos"

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_FORMAT_PRODUCTION = "%(levelname)s %(name)s: %(message)s"

# HTTP clients under supabase and upstash-redis log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "hpack")


def _level_from_env() -> int:
    name = os.environ.get("POS_LOG_LEVEL") or os.environ.get("LOG_LEVEL") or "INFO"
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> logging.Logger:
    """Attach the stdout handler to the cafepos logger once."""
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return logger

    is_production = os.environ.get("POS_ENV") == "production"
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT_PRODUCTION if is_production else LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_level_from_env())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logger


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a module; names outside the package are nested under it."""
    configure_logging()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: str | int | None) -> str:
    """
    Session or order id made safe for a log line.

    Control characters are escaped so a crafted X-Session-Id cannot forge
    lines, and only the first 8 characters are kept. Empty gives "N/A".
    """
    if id_value is None or id_value == "":
        return "N/A"
    safe_value = (
        str(id_value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )
    return safe_value[:8]


__all__ = [
    "configure_logging",
    "get_logger",
    "sanitize_id_for_logging",
]
