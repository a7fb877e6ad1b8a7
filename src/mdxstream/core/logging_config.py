"""
Structured Logging Configuration
Diagnostics sink for hydration, built on structlog.
"""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

from .config import Settings

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FIELDS = "%(name)s %(levelname)s %(message)s"


def _output_handler(json_logs: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(jsonlogger.JsonFormatter(JSON_FIELDS))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    return handler


def _processors(json_logs: bool) -> list:
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structured logging.

    Safe to call again; the previous root handlers are replaced.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Render events as JSON for log shippers
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, handlers=[_output_handler(json_logs)], force=True)

    structlog.configure(
        processors=_processors(json_logs),
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: Settings) -> None:
    """Configure logging from loaded settings."""
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)


def get_logger(name: str, **context: Any) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)
        **context: Key/values bound to every event from this logger

    Returns:
        Configured structlog logger
    """
    logger = structlog.get_logger(name)
    return logger.bind(**context) if context else logger


def session_logger(session_id: str) -> structlog.BoundLogger:
    """Logger for one completion session; every event carries the session id."""
    return get_logger("mdxstream.session", session_id=session_id)
