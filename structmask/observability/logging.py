"""Structured logging with tracing support."""

from __future__ import annotations

import contextvars
import logging
import sys
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Generator, Optional

import structlog

from ..config import LoggingConfig, get_config

# Context variable for correlation IDs
correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def add_correlation_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add correlation ID to log events."""
    corr_id = correlation_id.get()
    if corr_id:
        event_dict["correlation_id"] = corr_id
    return event_dict


def add_timestamp(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add timestamp to log events."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_level(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add log level to event dict."""
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure structlog on top of the standard library logging module."""
    if config is None:
        config = get_config().logging

    processors_list: list[Any] = [
        structlog.stdlib.filter_by_level,
        add_timestamp,
        add_level,
        structlog.stdlib.add_logger_name,
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.format == "json":
        processors_list.append(structlog.processors.JSONRenderer())
    else:
        processors_list.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors_list,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler: logging.Handler
    if config.output == "file" and config.file_path:
        handler = logging.FileHandler(config.file_path)
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger("structmask")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, config.level, logging.WARNING))


def get_logger(name: str) -> Any:
    """Get a structlog logger that emits through the stdlib logger ``name``.

    Level filtering is left to the stdlib logger, so nothing is emitted
    below WARNING until :func:`configure_logging` lowers the level.
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )


@contextmanager
def correlation_context(corr_id: Optional[str] = None) -> Generator[str, None, None]:
    """Context manager for correlation ID."""
    if corr_id is None:
        corr_id = str(uuid.uuid4())

    token = correlation_id.set(corr_id)
    try:
        yield corr_id
    finally:
        correlation_id.reset(token)


@contextmanager
def trace_operation(
    operation: str, enabled: Optional[bool] = None, **kwargs: Any
) -> Generator[None, None, None]:
    """Log the start, completion or failure of an operation with its duration."""
    if enabled is None:
        enabled = get_config().logging.enable_tracing
    if not enabled:
        yield
        return

    logger = get_logger(__name__)
    trace_id = str(uuid.uuid4())
    start = time.perf_counter()

    logger.debug("Operation started", operation=operation, trace_id=trace_id, **kwargs)
    try:
        yield
    except Exception as e:
        logger.error(
            "Operation failed",
            operation=operation,
            trace_id=trace_id,
            duration_ms=(time.perf_counter() - start) * 1000,
            status="error",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise
    logger.debug(
        "Operation completed",
        operation=operation,
        trace_id=trace_id,
        duration_ms=(time.perf_counter() - start) * 1000,
        status="success",
    )
