"""
Request middleware for the brand console API.

- Correlation / request ID tracking, exposed to logs and error responses
"""

from .correlation import (
    CorrelationIdMiddleware,
    CorrelationLogFilter,
    correlation_id_ctx,
    request_id_ctx,
)

__all__ = [
    "CorrelationIdMiddleware",
    "CorrelationLogFilter",
    "correlation_id_ctx",
    "request_id_ctx",
]
