"""
FastAPI middleware for observability.

Correlation ID and request logging middleware.

Dependencies: fastapi, starlette, student_dashboard.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from student_dashboard.observability.correlation import (
    clear_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one record per request with status and duration."""

    async def dispatch(self, request: Request, call_next):
        """
        Time the request and log its outcome.

        Health probes are logged at DEBUG to keep access logs readable.
        """
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        level = logging.DEBUG if request.url.path.endswith("/health") else logging.INFO

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{route} - unhandled {type(e).__name__}",
                extra={"path": request.url.path, "duration_ms": _elapsed_ms(started)},
            )
            raise

        logger.log(
            level,
            f"{route} - {response.status_code}",
            extra={
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(started),
                "client_host": request.client.host if request.client else None,
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Middleware for correlation ID injection."""

    async def dispatch(self, request: Request, call_next):
        """
        Bind a correlation ID for the request and echo it in the response.

        An incoming X-Correlation-ID header is reused; otherwise one is generated.
        """
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
