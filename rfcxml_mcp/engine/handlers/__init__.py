"""Tool handlers for the RFC engine.

This package contains the tool handlers organized by domain:
- structure: Document navigation (get_rfc_structure, get_definitions,
  get_rfc_dependencies, get_related_sections)
- requirements: Requirement extraction (get_requirements, generate_checklist)
- validation: Statement checking (validate_statement)

Each handler is a standalone async function that takes:
- params: dict[str, Any] - Tool parameters from MCP call
- ctx: HandlerContext - Shared engine context (RFC service)

And returns:
- ToolResult with data, input_tokens, output_tokens
"""

from .base import HandlerContext, HandlerFunc, build_result, count_tokens, source_fields
from .requirements import (
    handle_generate_checklist,
    handle_get_requirements,
)
from .structure import (
    handle_get_definitions,
    handle_get_related_sections,
    handle_get_rfc_dependencies,
    handle_get_rfc_structure,
)
from .validation import handle_validate_statement

__all__ = [
    # Base
    "HandlerContext",
    "HandlerFunc",
    "build_result",
    "count_tokens",
    "source_fields",
    # Structure handlers
    "handle_get_rfc_structure",
    "handle_get_definitions",
    "handle_get_rfc_dependencies",
    "handle_get_related_sections",
    # Requirement handlers
    "handle_get_requirements",
    "handle_generate_checklist",
    # Validation handlers
    "handle_validate_statement",
]
