"""Tests for structured logging configuration."""

from __future__ import annotations

import io
import json
import logging
import sys

import pytest
import structlog

from lexseq.core.logging import configure_logging


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """Reset logging configuration between tests."""
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)


def _capture() -> io.StringIO:
    """Point the configured root handler at a buffer, keeping its formatter."""
    captured = io.StringIO()
    (handler,) = logging.getLogger().handlers
    handler.setStream(captured)
    return captured


def test_configure_logging_console_output() -> None:
    """Console mode attaches exactly one stderr handler with a structlog formatter."""
    configure_logging(json_output=False, level="INFO")

    assert logging.getLogger().level == logging.INFO

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert handlers[0].stream is sys.stderr
    assert isinstance(handlers[0].formatter, structlog.stdlib.ProcessorFormatter)


def test_configure_logging_json_output() -> None:
    """structlog loggers produce JSON lines."""
    configure_logging(json_output=True, level="INFO")
    captured = _capture()

    log = structlog.get_logger("test_json")
    log.info("issued id", prefix="task")

    data = json.loads(captured.getvalue().strip())
    assert data["event"] == "issued id"
    assert data["prefix"] == "task"
    assert data["level"] == "info"
    assert data["logger"] == "test_json"
    assert "timestamp" in data


def test_stdlib_records_rendered_as_json() -> None:
    """Module loggers from logging.getLogger go through the same JSON renderer."""
    configure_logging(json_output=True, level="DEBUG")
    captured = _capture()

    logging.getLogger("lexseq.core.ids").debug("Issued %s (index %d)", "task-A", 0)

    data = json.loads(captured.getvalue().strip())
    assert data["event"] == "Issued task-A (index 0)"
    assert data["level"] == "debug"
    assert data["logger"] == "lexseq.core.ids"
    assert "timestamp" in data


def test_stdlib_records_console() -> None:
    configure_logging(json_output=False, level="INFO")
    captured = _capture()

    logging.getLogger("lexseq.core.config").info("Loading config from %s", "x.yaml")

    output = captured.getvalue()
    assert "Loading config from x.yaml" in output
    assert "lexseq.core.config" in output


def test_level_filters_records() -> None:
    configure_logging(json_output=True, level="WARNING")
    captured = _capture()

    logging.getLogger("lexseq.core.ids").info("hidden")
    structlog.get_logger("test_json").info("hidden too")

    assert captured.getvalue() == ""


def test_configure_logging_default_level() -> None:
    configure_logging()
    assert logging.getLogger().level == logging.WARNING


@pytest.mark.parametrize("level", ["DEBUG", "info", "ERROR"])
def test_configure_logging_levels(level: str) -> None:
    configure_logging(json_output=False, level=level)
    assert logging.getLogger().level == getattr(logging, level.upper())
