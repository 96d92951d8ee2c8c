"""Request body size limit middleware.

Rejects requests whose declared body size exceeds the configured JSON
payload limit before they reach an endpoint.
"""

import json

from ..config import settings


class PayloadSizeLimitMiddleware:
    """
    Reject oversized request bodies with 413.

    Only the Content-Length header is checked; bodies without one are
    passed through.
    """

    def __init__(self, app, max_size: int | None = None):
        self.app = app
        self.max_size = max_size or settings.max_json_payload_size

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        content_length = headers.get(b"content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_size:
            response_body = json.dumps(
                {
                    "success": False,
                    "error": f"Request body too large: limit is {self.max_size} bytes",
                    "usage": {"latency_ms": 0},
                }
            ).encode()
            await send(
                {
                    "type": "http.response.start",
                    "status": 413,
                    "headers": [
                        (b"content-type", b"application/json"),
                        (b"content-length", str(len(response_body)).encode()),
                    ],
                }
            )
            await send(
                {
                    "type": "http.response.body",
                    "body": response_body,
                }
            )
            return

        await self.app(scope, receive, send)
