"""Structured logging for the lexseq CLI.

lexseq modules log through ``logging.getLogger(__name__)``.  The root
handler renders those records with structlog's ``ProcessorFormatter``, so
stdlib and structlog loggers share one format, console or JSON.
"""

from __future__ import annotations

import logging
import sys

import structlog


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def make_formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    """Return a stdlib formatter that renders every record through structlog."""
    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def configure_logging(json_output: bool = False, level: str = "WARNING") -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        json_output: If True, one JSON object per line; otherwise console output.
        level: Log level (DEBUG, INFO, WARNING, ERROR).
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    # stderr keeps command output on stdout machine-readable.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(make_formatter(json_output))
    root.addHandler(handler)
