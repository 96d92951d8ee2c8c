"""JSON-RPC 2.0 envelope helpers for the MCP endpoint.

See: https://www.jsonrpc.org/specification
"""

from typing import Any

JSONRPC_VERSION = "2.0"

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
SERVER_ERROR = -32000  # Base for application-specific errors


def jsonrpc_response(id: Any, result: Any) -> dict:
    """Success envelope; ``id`` echoes the request id."""
    return {"jsonrpc": JSONRPC_VERSION, "id": id, "result": result}


def jsonrpc_error(id: Any, code: int, message: str) -> dict:
    """Error envelope.

    Args:
        id: Request id, None when the request could not be read
        code: One of the error codes above
        message: Human-readable error message
    """
    return {"jsonrpc": JSONRPC_VERSION, "id": id, "error": {"code": code, "message": message}}


def is_notification(body: dict) -> bool:
    """Only a request without an id member is a notification; "id": null is answered."""
    return "id" not in body
