"""
Structured Logging Configuration
Centralized logger with request_id, user_id, role and course_id context
"""
from __future__ import annotations

import logging
import logging.config
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger


def _level(log_level: str) -> int:
    return getattr(logging, log_level.upper(), logging.INFO)


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    sql_echo: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Sets up structlog with processors for:
    - Adding timestamps
    - Adding log levels
    - Adding context bound per request (request_id, user_id, role)
    - JSON formatting (production) or console (development)

    Stdlib loggers (uvicorn, sqlalchemy, alembic) are routed through a
    python-json-logger formatter when JSON output is selected.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to output JSON format (True for prod, False for dev)
        sql_echo: Whether SQLAlchemy statements are logged at INFO
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": jsonlogger.JsonFormatter,
                    "fmt": "%(asctime)s %(name)s %(levelname)s %(message)s",
                },
                "console": {
                    "format": "%(message)s",
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if json_logs else "console",
                    "stream": sys.stdout,
                },
            },
            "root": {"level": _level(log_level), "handlers": ["default"]},
            "loggers": {
                "uvicorn.access": {"level": "WARNING"},
                "sqlalchemy.engine": {"level": "INFO" if sql_echo else "WARNING"},
                "alembic": {"level": "INFO"},
            },
        }
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer(default=str))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Configured structlog logger

    Usage:
        logger = get_logger(__name__)
        logger.info("course_scheduled", course_id=course.id, instructor_id=instructor_id)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """
    Bind context variables to all subsequent log entries.

    Useful for setting request-scoped context like request_id, user_id, role.

    Args:
        **kwargs: Context key-value pairs
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**{k: v for k, v in kwargs.items() if v is not None})


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
