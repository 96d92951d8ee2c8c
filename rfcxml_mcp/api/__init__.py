"""API utilities and dependencies.

This package contains shared API utilities:
- deps: FastAPI dependency injection functions
"""

from .deps import format_validation_error, get_engine, sanitize_error_message

__all__ = [
    "get_engine",
    "format_validation_error",
    "sanitize_error_message",
]
