"""Logging setup.

Loggers write to stderr, either as plain text lines or as JSON lines when
structured logging is enabled in settings.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def get_logger(
    name: str = "trace-registry",
    level: Optional[str] = None,
    structured: bool = False,
) -> logging.Logger:
    """Create (or return) a configured logger.

    Args:
        name: Logger name.
        level: Optional log level string (e.g. "INFO"). If omitted, keeps existing.
        structured: Emit JSON lines instead of plain text.

    Returns:
        Configured logger writing to stderr.
    """

    logger = logging.getLogger(name)
    logger.propagate = False

    if level is not None:
        logger.setLevel(level.upper())
    elif logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)

    formatter: logging.Formatter = JsonFormatter() if structured else logging.Formatter(fmt=TEXT_FORMAT)

    handler = next((h for h in logger.handlers if isinstance(h, logging.StreamHandler)), None)
    if handler is None:
        handler = logging.StreamHandler(stream=sys.stderr)
        logger.addHandler(handler)
    handler.setFormatter(formatter)

    return logger
