"""Tests for logger setup."""

from __future__ import annotations

import json
import logging

from trace_registry.observability.logger import JsonFormatter, get_logger


def test_get_logger_configures_single_stderr_handler() -> None:
    logger = get_logger("test-logger-single", level="debug")
    get_logger("test-logger-single")

    handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_default_level_is_info() -> None:
    logger = get_logger("test-logger-default")

    assert logger.level == logging.INFO


def test_structured_logger_uses_json_formatter() -> None:
    logger = get_logger("test-logger-json", structured=True)

    assert isinstance(logger.handlers[0].formatter, JsonFormatter)

    get_logger("test-logger-json")
    assert not isinstance(logger.handlers[0].formatter, JsonFormatter)


def test_json_formatter_output() -> None:
    record = logging.LogRecord(
        name="trace-registry",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Trace %r reached max_calls=%d",
        args=("t1", 3),
        exc_info=None,
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "trace-registry"
    assert payload["message"] == "Trace 't1' reached max_calls=3"
    assert "timestamp" in payload
