"""Request context middleware.

Tags every HTTP response with a request id, its processing time and the
standard security headers, using the pure ASGI pattern.
"""

import logging
import time
from uuid import uuid4

from ..config import settings

logger = logging.getLogger(__name__)


class RequestContextMiddleware:
    """
    Add request id, timing and security headers to all responses.

    Uses pure ASGI middleware pattern instead of BaseHTTPMiddleware
    to avoid Content-Length mismatch issues with streaming responses.

    Headers added:
        - X-Request-Id: Client-supplied id, or a generated one
        - X-Response-Time-Ms: Time until the response started
        - X-Content-Type-Options: nosniff
        - X-Frame-Options: DENY
        - Strict-Transport-Security: (production only)
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        request_id = headers.get(b"x-request-id", b"").decode() or str(uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        started = time.perf_counter()

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                elapsed_ms = int((time.perf_counter() - started) * 1000)
                response_headers = list(message.get("headers", []))
                response_headers.append((b"x-request-id", request_id.encode()))
                response_headers.append((b"x-response-time-ms", str(elapsed_ms).encode()))
                response_headers.append((b"x-content-type-options", b"nosniff"))
                response_headers.append((b"x-frame-options", b"DENY"))

                # Add HSTS in production (non-debug mode)
                if not settings.debug:
                    response_headers.append(
                        (b"strict-transport-security", b"max-age=31536000; includeSubDomains")
                    )

                logger.debug(
                    f"{scope.get('method')} {scope.get('path')} -> {message['status']} "
                    f"in {elapsed_ms}ms [{request_id}]"
                )
                message = {**message, "headers": response_headers}
            await send(message)

        await self.app(scope, receive, send_with_headers)
