"""
Logging configuration.

Modules obtain loggers through ``get_logger``. The library never touches the
root logger; applications that want bigrational output call ``setup_logging``.
"""

import sys
import logging
from typing import Any, Dict
from datetime import datetime, timezone
import json

from .config import get_settings

LIBRARY_LOGGER = "bigrational"


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per record.

    Structured details attached by the library (``extra={"extra_data": {...}}``,
    e.g. the root index and iteration count of a bisection) become top-level
    keys of the object.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
        }
        payload.update(getattr(record, "extra_data", None) or {})

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text log formatter"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def setup_logging(level: str | None = None, fmt: str | None = None) -> logging.Logger:
    """
    Attach a stdout handler to the library logger.

    Args:
        level: Log level name (default from settings)
        fmt: "text" or "json" (default from settings)

    Returns:
        The configured ``bigrational`` logger
    """
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.WARNING)

    if (fmt or settings.LOG_FORMAT) == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = TextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(log_level)

    logger = logging.getLogger(LIBRARY_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(log_level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)
