"""
Per-request correlation IDs.

The ID lives in a context variable so it follows the request through
awaits and thread-pool hops without being passed explicitly.

Dependencies: contextvars
System role: Request tracing for log lines
"""

from contextvars import ContextVar
import uuid

CORRELATION_HEADER = "X-Correlation-ID"

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind a correlation ID to the current context, generating one if missing."""
    value = correlation_id or uuid.uuid4().hex
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    """Correlation ID of the current context, empty outside a request."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")
