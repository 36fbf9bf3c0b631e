"""
Correlation ids for request tracing.

Each HTTP request gets an id (taken from X-Correlation-ID / X-Request-ID when
the caller sends one). The id lives in a context variable so log records and
the outbound insight call can carry it without threading it through every
signature.
"""

import contextvars
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

_correlation_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id",
    default=None,
)

CORRELATION_HEADERS = [
    "X-Correlation-ID",
    "X-Request-ID",
]

RESPONSE_HEADER = "X-Correlation-ID"


def get_correlation_id() -> Optional[str]:
    """Correlation id of the current context, or None outside a request."""
    return _correlation_id_ctx.get()


def generate_correlation_id() -> str:
    # 8 hex chars is plenty to find a request in the logs
    return uuid.uuid4().hex[:8]


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Stores the request's correlation id on request.state and in context."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = None
        for header in CORRELATION_HEADERS:
            correlation_id = request.headers.get(header)
            if correlation_id:
                break

        if not correlation_id:
            correlation_id = generate_correlation_id()

        request.state.correlation_id = correlation_id
        token = _correlation_id_ctx.set(correlation_id)

        try:
            response = await call_next(request)
            response.headers[RESPONSE_HEADER] = correlation_id
            return response
        finally:
            _correlation_id_ctx.reset(token)


def propagate_correlation_headers(headers: Optional[dict] = None) -> dict:
    """
    Copy of `headers` with X-Correlation-ID added when a correlation id is set.

    Used for the outbound insight request so the backend's logs line up
    with ours.
    """
    headers = dict(headers or {})
    cid = get_correlation_id()
    if cid:
        headers[RESPONSE_HEADER] = cid
    return headers


class CorrelationContext:
    """
    Set a correlation id outside of a request (scripts, background tasks).

    Example:
        with CorrelationContext("check-entries"):
            logger.info("Loading entries")
    """

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or generate_correlation_id()
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = _correlation_id_ctx.set(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _correlation_id_ctx.reset(self._token)
            self._token = None
