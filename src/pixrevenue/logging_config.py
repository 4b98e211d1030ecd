"""Structured logging setup."""

import logging
import sys

import structlog

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    # Resolve sys.stderr per call; it may be swapped after configuration.
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: str = "WARNING", json_logs: bool = False) -> None:
    """Configure structlog to write to stderr.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR)
        json_logs: Render events as JSON lines instead of console text
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.WARNING)
        ),
        context_class=dict,
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
