"""FastAPI dependency injection functions.

This module contains shared dependencies for API endpoints:
- Access to the application-wide RFC engine
- Error sanitization
"""

import logging

from fastapi import HTTPException, Request
from pydantic import ValidationError

from ..rfc_engine import RFCEngine

logger = logging.getLogger(__name__)


# ============ ERROR SANITIZATION ============


def sanitize_error_message(error: Exception) -> str:
    """
    Sanitize error messages to prevent information disclosure.

    Returns a generic message for unexpected errors while preserving
    useful information for known error types.
    """
    error_str = str(error)

    # Known safe error patterns that can be returned to client
    safe_patterns = [
        "Unknown tool",
        "Invalid parameter",
        "Failed to fetch RFC",
        "XML could not be retrieved",
        "not found",
    ]

    for pattern in safe_patterns:
        if pattern.lower() in error_str.lower():
            return error_str

    # Log the actual error for debugging
    logger.error(f"Tool execution error: {error}", exc_info=True)

    # Return generic message for unknown errors
    return "An error occurred processing your request. Please try again."


def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into one "Invalid parameter" message."""
    details = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "params"
        details.append(f"'{location}': {item.get('msg', 'invalid value')}")
    return f"Invalid parameter {'; '.join(details)}"


# ============ ENGINE ============


def get_engine(request: Request) -> RFCEngine:
    """Return the RFCEngine created during application startup."""
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Server is starting up")
    return engine
