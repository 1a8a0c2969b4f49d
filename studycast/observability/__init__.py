"""
Observability module.

Provides logging configuration, structured logging helpers and
correlation ID tracking.
"""

from studycast.observability.correlation import (
    CorrelationIdFilter,
    get_correlation_id,
    set_correlation_id,
)
from studycast.observability.log_utils import (
    error_context,
    log_exception_with_context,
    log_with_context,
)
from studycast.observability.logger import configure_logging, get_logger

__all__ = [
    "CorrelationIdFilter",
    "configure_logging",
    "error_context",
    "get_correlation_id",
    "get_logger",
    "log_exception_with_context",
    "log_with_context",
    "set_correlation_id",
]
