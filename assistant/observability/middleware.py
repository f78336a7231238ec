"""
Request observability middleware.

- CorrelationMiddleware: binds a correlation ID for the request and echoes
  it back in the response header
- RequestLoggingMiddleware: one line per request with status and timing

Dependencies: starlette, assistant.observability.correlation
System role: HTTP request tracing
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from assistant.observability.correlation import (
    CORRELATION_HEADER,
    clear_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and elapsed time of every request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        label = f"{request.method} {request.url.path}"
        try:
            response: Response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.exception(f"{label} - {type(e).__name__} after {elapsed_ms:.1f}ms")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"{label} - {response.status_code} in {elapsed_ms:.1f}ms",
            extra={"status_code": response.status_code, "process_time_ms": round(elapsed_ms, 2)},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID to each request."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
