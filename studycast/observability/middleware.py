"""
FastAPI middleware for observability.

CorrelationMiddleware binds the X-Correlation-ID header (or a fresh id) to
the request context so upload pipelines started by the request inherit it.
RequestLoggingMiddleware logs one line per request with timing.

Dependencies: fastapi, starlette, studycast.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from studycast.observability.correlation import clear_correlation_id, set_correlation_id
from studycast.observability.log_utils import error_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

# Logged at DEBUG
QUIET_PATH_SUFFIXES = ("/health",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of every request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        started = time.perf_counter()
        method = request.method
        path = request.url.path

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} - Unhandled exception",
                extra={
                    "method": method,
                    "path": path,
                    "process_time_ms": _elapsed_ms(started),
                    **error_context(e),
                },
            )
            raise

        level = logging.DEBUG if path.endswith(QUIET_PATH_SUFFIXES) else logging.INFO
        logger.log(
            level,
            f"{method} {path} - {response.status_code}",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "process_time_ms": _elapsed_ms(started),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id to the request and echo it in the response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
