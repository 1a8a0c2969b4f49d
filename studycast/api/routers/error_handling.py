"""
Router error handling utilities.

Provides a decorator that maps the domain exception hierarchy onto
HTTPExceptions with a uniform error body.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from studycast.core.exceptions import ErrorKind, StudycastError
from studycast.models.common import ErrorResponse

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorKind.EXTRACTION_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.SUMMARIZATION_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.NARRATION_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.QUIZ_GENERATION_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.CONVERSATION_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.STORAGE_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(error: StudycastError) -> HTTPException:
    """Build the HTTPException for a domain error."""
    body = ErrorResponse(error=error.message, kind=error.kind.value, details=error.details or None)
    return HTTPException(
        status_code=STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=body.model_dump(),
    )


def handle_domain_errors(func: F) -> F:
    """
    Decorator to transform domain errors into HTTPExceptions.

    This centralizes:
    - Logging of errors with their kind and details
    - Mapping error kinds to HTTP status codes
    - Ensuring uniform error response bodies
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except StudycastError as e:
            http_error = to_http_exception(e)
            log = logger.warning if http_error.status_code < 500 else logger.error
            log(
                f"{func.__name__} - {e.kind.value}: {e.message}",
                extra={"kind": e.kind.value, "status_code": http_error.status_code},
            )
            raise http_error from e

        except HTTPException:
            raise

        except Exception as e:
            logger.exception(
                f"Unexpected failure in {func.__name__}",
                extra={"error_type": type(e).__name__},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=ErrorResponse(error="Internal server error", kind="internal_error").model_dump(),
            ) from e

    return wrapper  # type: ignore
