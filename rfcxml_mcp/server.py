"""FastAPI MCP Server for RFCXML."""

import json
import logging
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from . import __version__
from .api.deps import format_validation_error, get_engine, sanitize_error_message
from .config import settings
from .mcp import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    RESOURCE_DEFINITIONS,
    TOOL_DEFINITIONS,
    UnknownResourceError,
    is_notification,
    jsonrpc_error,
    jsonrpc_response,
    read_resource,
)
from .middleware import PayloadSizeLimitMiddleware, RequestContextMiddleware
from .models import HealthResponse, MCPRequest, MCPResponse, UsageInfo
from .rfc_engine import RFCEngine
from .services import RFCFetcher, RFCService, create_http_client

logger = logging.getLogger(__name__)

MCP_PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "rfcxml-mcp"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    logger.info(f"Starting RFCXML MCP Server v{__version__}")

    # Validate CORS configuration in production
    if not settings.debug and settings.cors_allowed_origins == "*":
        logger.warning(
            "SECURITY WARNING: CORS is configured to allow all origins ('*'). "
            "Set RFCXML_CORS_ALLOWED_ORIGINS to specific domains in production."
        )

    http_client = create_http_client()
    app.state.engine = RFCEngine(RFCService(RFCFetcher(http_client)))

    yield
    # Shutdown
    await http_client.aclose()


app = FastAPI(
    title="RFCXML MCP Server",
    description="MCP endpoint for structured access to IETF RFC requirements",
    version=__version__,
    lifespan=lifespan,
)

# Reject oversized bodies before anything else runs
app.add_middleware(PayloadSizeLimitMiddleware)

# Request id, timing and security headers
app.add_middleware(RequestContextMiddleware)

# CORS middleware - use configured origins instead of wildcard
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
)


# ============ EXCEPTION HANDLERS ============


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent response format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "usage": {"latency_ms": 0},
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with sanitized error messages."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "An internal server error occurred. Please try again.",
            "usage": {"latency_ms": 0},
        },
    )


# ============ HEALTH ENDPOINTS ============


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint (lightweight liveness check)."""
    engine = getattr(request.app.state, "engine", None)
    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.now(UTC),
        cached_rfcs=engine.service.cached_count if engine else 0,
    )


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with API info."""
    return {
        "name": "RFCXML MCP Server",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "mcp": "/mcp",
    }


# ============ REST MCP ENDPOINT ============


@app.post("/v1/mcp", response_model=MCPResponse, tags=["MCP"])
async def mcp_endpoint(
    request: MCPRequest,
    engine: Annotated[RFCEngine, Depends(get_engine)],
) -> MCPResponse:
    """
    Execute an RFC tool.

    Args:
        request: The MCP request with tool and parameters
        engine: Application-wide RFC engine

    Returns:
        MCPResponse with result or error
    """
    start_time = time.perf_counter()

    try:
        result = await engine.execute(request.tool, request.params)
    except ValidationError as e:
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        return MCPResponse(
            success=False,
            error=format_validation_error(e),
            usage=UsageInfo(latency_ms=latency_ms),
        )
    except Exception as e:
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.warning(f"Tool {request.tool} failed after {latency_ms}ms: {e}")
        # Return sanitized error to client
        return MCPResponse(
            success=False,
            error=sanitize_error_message(e),
            usage=UsageInfo(latency_ms=latency_ms),
        )

    latency_ms = int((time.perf_counter() - start_time) * 1000)
    return MCPResponse(
        success=True,
        result=result.data,
        usage=UsageInfo(
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            latency_ms=latency_ms,
        ),
    )


# ============ JSON-RPC MCP ENDPOINT ============


@app.post("/mcp", tags=["MCP"])
async def mcp_jsonrpc_endpoint(
    request: Request,
    engine: Annotated[RFCEngine, Depends(get_engine)],
):
    """
    MCP JSON-RPC 2.0 endpoint.

    Supports initialize, ping, tools/list, tools/call, resources/list and
    resources/read. Notifications get 204; batches get a list of responses.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(jsonrpc_error(None, PARSE_ERROR, "Parse error"), status_code=400)

    # Handle batch requests
    if isinstance(body, list):
        responses = []
        for req in body:
            resp = await _handle_jsonrpc_request(req, engine)
            if resp:  # Skip notifications (no id)
                responses.append(resp)
        return JSONResponse(responses) if responses else Response(status_code=204)

    # Handle single request
    response = await _handle_jsonrpc_request(body, engine)
    return JSONResponse(response) if response else Response(status_code=204)


async def _handle_jsonrpc_request(body: Any, engine: RFCEngine) -> dict | None:
    """Handle a single JSON-RPC request."""
    if not isinstance(body, dict):
        return jsonrpc_error(None, INVALID_REQUEST, "Invalid request")

    if is_notification(body):
        return None

    method = body.get("method")
    id = body.get("id")
    params = body.get("params") or {}

    if not isinstance(method, str) or not isinstance(params, dict):
        return jsonrpc_error(id, INVALID_REQUEST, "Invalid request")

    if method == "initialize":
        return jsonrpc_response(
            id,
            {
                "protocolVersion": MCP_PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
                "capabilities": {"tools": {}, "resources": {}},
            },
        )
    elif method == "tools/list":
        return jsonrpc_response(id, {"tools": TOOL_DEFINITIONS})
    elif method == "tools/call":
        return await _handle_call_tool(id, params, engine)
    elif method == "resources/list":
        return jsonrpc_response(id, {"resources": RESOURCE_DEFINITIONS})
    elif method == "resources/read":
        try:
            return jsonrpc_response(id, read_resource(params.get("uri", "")))
        except UnknownResourceError:
            return jsonrpc_error(id, INVALID_PARAMS, f"Unknown resource: {params.get('uri')}")
    elif method == "ping":
        return jsonrpc_response(id, {})
    else:
        return jsonrpc_error(id, METHOD_NOT_FOUND, f"Method not found: {method}")


async def _handle_call_tool(id: Any, params: dict, engine: RFCEngine) -> dict:
    """Handle MCP tools/call request."""
    tool_name = params.get("name")
    arguments = params.get("arguments") or {}

    if not isinstance(arguments, dict):
        return jsonrpc_error(id, INVALID_PARAMS, "Invalid parameter 'arguments': must be an object")

    try:
        result = await engine.execute(tool_name, arguments)
    except ValidationError as e:
        return jsonrpc_error(id, INVALID_PARAMS, format_validation_error(e))
    except ValueError as e:
        if str(e).startswith("Unknown tool"):
            return jsonrpc_error(id, INVALID_PARAMS, str(e))
        return _tool_error(id, e)
    except Exception as e:
        return _tool_error(id, e)

    return jsonrpc_response(
        id,
        {
            "content": [{"type": "text", "text": json.dumps(result.data, indent=2, default=str)}],
        },
    )


def _tool_error(id: Any, error: Exception) -> dict:
    logger.warning(f"Tool call failed: {error}")
    return jsonrpc_response(
        id,
        {
            "content": [{"type": "text", "text": f"Error: {sanitize_error_message(error)}"}],
            "isError": True,
        },
    )


# ============ MAIN ============


def main():
    """Run the server with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    uvicorn.run(
        "rfcxml_mcp.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
