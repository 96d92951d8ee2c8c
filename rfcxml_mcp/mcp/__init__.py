"""MCP (Model Context Protocol) transport module.

This module contains components for the MCP JSON-RPC over HTTP transport:
- Tool definitions for tools/list
- Resource definitions for resources/list and resources/read
- JSON-RPC 2.0 helpers

The HTTP endpoints themselves live in server.py.
"""

from .jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JSONRPC_VERSION,
    SERVER_ERROR,
    is_notification,
    jsonrpc_error,
    jsonrpc_response,
)
from .resources import RESOURCE_DEFINITIONS, UnknownResourceError, read_resource
from .tool_defs import TOOL_DEFINITIONS

__all__ = [
    # Tool definitions
    "TOOL_DEFINITIONS",
    # Resources
    "RESOURCE_DEFINITIONS",
    "UnknownResourceError",
    "read_resource",
    # JSON-RPC helpers
    "jsonrpc_response",
    "jsonrpc_error",
    "is_notification",
    "JSONRPC_VERSION",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR",
]
