"""
Structured logging configuration using structlog.

This module sets up structlog for JSON or console logging with context binding.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog

from .config import settings


def setup_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure structlog for structured logging.

    Sets up processors for:
    - Context variable merging
    - Log level addition
    - Exception info rendering
    - Timestamp addition
    - JSON or console rendering based on settings

    Args:
        level: Log level name overriding ``settings.log_level``
        json_output: Force JSON (True) or console (False) rendering
        stream: Output stream (default: stderr, keeping stdout free for results)
    """
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if json_output is None else json_output

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if use_json
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        structlog BoundLogger instance
    """
    return structlog.get_logger(name)
