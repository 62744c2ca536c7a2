"""Logging and tracing helpers."""

from .logging import (
    configure_logging,
    correlation_context,
    correlation_id,
    get_logger,
    trace_operation,
)

__all__ = [
    "configure_logging",
    "correlation_context",
    "correlation_id",
    "get_logger",
    "trace_operation",
]
