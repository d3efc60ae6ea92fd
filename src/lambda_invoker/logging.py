"""
Structured logging configuration for the Lambda invoker.

Uses structlog for structured, context-aware logging with:
- JSON output for production
- Pretty console output for development
- Request ID and target function propagation via context variables
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generator

import structlog
from structlog.types import Processor

from .config import get_invoker_config

# Context variables for request-scoped data
_request_id: ContextVar[str | None] = ContextVar('request_id', default=None)
_function_name: ContextVar[str | None] = ContextVar('function_name', default=None)


def get_request_id() -> str | None:
    """Get the current request ID from context."""
    return _request_id.get()


def get_function_name() -> str | None:
    """Get the current target function name from context."""
    return _function_name.get()


def add_context_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor that adds context variables to log entries."""
    request_id = get_request_id()
    function_name = get_function_name()

    if request_id:
        event_dict.setdefault('request_id', request_id)
    if function_name:
        event_dict.setdefault('function_name', function_name)

    return event_dict


def configure_logging(
    json_output: bool | None = None,
    log_level: str | None = None,
) -> None:
    """
    Configure structlog for the application.

    Args:
        json_output: If True, output JSON logs (for production).
                    Defaults to the LOG_JSON setting.
        log_level: Override log level (defaults to the LOG_LEVEL setting)
    """
    settings = get_invoker_config()
    level = log_level or settings.LOG_LEVEL
    level_num = getattr(logging, level.upper(), logging.INFO)
    if json_output is None:
        json_output = settings.LOG_JSON

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stdout,
        level=level_num,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_context_info,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


@contextmanager
def logging_context(
    request_id: str | None = None,
    function_name: str | None = None,
) -> Generator[None, None, None]:
    """
    Context manager for setting logging context variables.

    Usage:
        with logging_context(request_id="abc123", function_name="producer"):
            logger.info("invoke.start")  # Includes request_id and function_name
    """
    old_request = _request_id.get()
    old_function = _function_name.get()

    try:
        if request_id is not None:
            _request_id.set(request_id)
        if function_name is not None:
            _function_name.set(function_name)
        yield
    finally:
        _request_id.set(old_request)
        _function_name.set(old_function)


# Initialize logging on module import
# Lambda deployments set LOG_JSON=true
configure_logging()
