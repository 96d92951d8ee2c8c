"""ASGI middleware for the FastAPI application.

This module provides middleware for:
- Request context (X-Request-Id, timing, security headers)
- Request body size limits
"""

from .payload_limit import PayloadSizeLimitMiddleware
from .request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
    "PayloadSizeLimitMiddleware",
]
