"""
Observability helpers for mongo-models.

Structured logging with correlation IDs.
"""

from .logging import (
    ContextualLoggerAdapter,
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    get_logging_context,
    log_operation,
    set_correlation_id,
)

__all__ = [
    "ContextualLoggerAdapter",
    "get_logger",
    "get_logging_context",
    "log_operation",
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
]
