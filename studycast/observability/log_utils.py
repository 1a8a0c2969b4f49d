"""
Structured logging helpers.

Turns pipeline and engine context (task ids, enums, upload bytes, domain
errors) into flat, log-safe `extra` fields.

Dependencies: logging (stdlib), studycast.core.exceptions
System role: Logging helper functions
"""

import enum
import logging
from typing import Any
from uuid import UUID

from studycast.core.exceptions import StudycastError

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a value for a log field.

    Collections and payloads are summarized by size instead of dumped, so an
    uploaded file or a message history never lands in the log.

    Args:
        value: Value to render
        max_length: Longer strings are truncated

    Returns:
        str: Log-safe representation
    """
    if value is None:
        return "None"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return f"bytes({len(value)})"
    if isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    text = value if isinstance(value, str) else str(value)
    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log message with every context value passed through safe_log_value."""
    logger.log(level, message, extra={key: safe_log_value(val) for key, val in context.items()})


def error_context(exc: BaseException) -> dict[str, str]:
    """
    Fields describing an exception.

    Domain errors add their kind and each details entry prefixed with
    "detail_" so they cannot collide with LogRecord attributes.
    """
    fields = {
        "error_type": type(exc).__name__,
        "error_msg": safe_log_value(str(exc)),
    }
    if isinstance(exc, StudycastError):
        fields["error_kind"] = exc.kind.value
        fields.update({f"detail_{key}": safe_log_value(val) for key, val in exc.details.items()})
    return fields


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """Log an exception with traceback, its error fields and extra context."""
    extra = {key: safe_log_value(val) for key, val in context.items()}
    extra.update(error_context(exc))
    logger.error(message, exc_info=exc, extra=extra)
