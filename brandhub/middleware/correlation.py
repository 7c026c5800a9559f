"""
Request and correlation IDs.

The request ID names one HTTP request; the correlation ID follows a client
across requests when it sends one back. Both live in context variables for
the duration of the request, are echoed in the response headers, show up in
every log line through CorrelationLogFilter and become trace_id in
problem-details bodies.

Incoming IDs are only trusted when they look like IDs; anything else is
replaced, so headers cannot smuggle text into log lines.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_HEADER = "X-Correlation-ID"
REQUEST_HEADER = "X-Request-ID"

_SAFE_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")
request_id_ctx: ContextVar[str] = ContextVar("request_id", default="")


def generate_id() -> str:
    return uuid.uuid4().hex[:12]


def accept_id(value: Optional[str]) -> str:
    """value when it is a usable ID, a fresh one otherwise."""
    if value and _SAFE_ID.match(value):
        return value
    return generate_id()


class CorrelationIdMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        correlation_id = accept_id(request.headers.get(CORRELATION_HEADER))
        request_id = accept_id(request.headers.get(REQUEST_HEADER))

        tokens = (correlation_id_ctx.set(correlation_id), request_id_ctx.set(request_id))
        request.state.request_id = request_id
        try:
            response = await call_next(request)
        finally:
            correlation_id_ctx.reset(tokens[0])
            request_id_ctx.reset(tokens[1])

        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers[REQUEST_HEADER] = request_id
        return response


def get_correlation_id() -> str:
    return correlation_id_ctx.get() or "unknown"


def get_request_id() -> str:
    return request_id_ctx.get() or "unknown"


class CorrelationLogFilter(logging.Filter):
    """Adds correlation_id and request_id to every record (see main.py format)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        record.request_id = get_request_id()
        return True
