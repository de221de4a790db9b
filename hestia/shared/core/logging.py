"""
Logging Configuration

Structured logging setup using structlog for consistent, parseable logs.

Log Output:
===========
Development:
    2025-03-02 10:30:00 [info     ] draft_created                  user_id=550e8400-e29b-...

Production (JSON):
    {"timestamp": "2025-03-02T10:30:00", "level": "info", "event": "draft_created", "user_id": "550e8400-..."}

Features:
=========
- Structured key-value logging
- Context variables (bind the acting user once per request or wizard session)
- Colored console output in development
- JSON output in production

Usage:
======
    from hestia.shared.core.logging import get_logger, log_context

    logger = get_logger(__name__)
    logger.info("asset_attached", draft_id=str(draft_id), position=3)

    # Add context to all subsequent logs
    log_context(user_id=str(user_id))
    logger.info("autosave_flushed")  # Includes user_id
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from hestia.config.settings import settings


def setup_logging() -> None:
    """
    Configure structured logging for the application.

    Development gets the colored console renderer, every other environment
    gets JSON lines for log aggregation.

    Called automatically when this module is imported.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_development:
        processors: list[Processor] = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name, usually the calling module's __name__

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Add context variables to all subsequent log calls.

    Args:
        **kwargs: Key-value pairs to add to log context

    Example:
        log_context(user_id=str(user_id), draft_id=str(draft_id))
    """
    structlog.contextvars.bind_contextvars(**kwargs)


# Initialize logging on module import
setup_logging()

# Default logger instance for convenient import
logger = get_logger("hestia")
