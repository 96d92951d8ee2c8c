"""Base infrastructure for tool handlers.

This module provides the common types and utilities used by all handler modules.
Each handler receives a HandlerContext with shared state and returns a ToolResult.
"""

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Coroutine

from ...models import SourceFormat, ToolResult
from ...services.rfc_service import ParsedRFCWithSource, SourceNoteContext, get_text_source_note

if TYPE_CHECKING:
    from ...services.rfc_service import RFCService


@dataclass
class HandlerContext:
    """Context object passed to all handlers.

    Contains the dependencies that handlers need to operate.
    This decouples handlers from the RFCEngine class.
    """

    # Fetch-and-parse entry point with its parse cache
    service: "RFCService"


# Type alias for handler functions
HandlerFunc = Callable[
    [dict[str, Any], HandlerContext],
    Coroutine[Any, Any, ToolResult],
]


def count_tokens(text: str) -> int:
    """Estimate token count for a string.

    Uses a simple heuristic of ~4 characters per token.
    This is a reasonable approximation for English text.
    """
    if not text:
        return 0
    return max(1, len(text) // 4)


def source_fields(parsed: ParsedRFCWithSource, context: SourceNoteContext) -> dict[str, str]:
    """``_source`` marker plus, for text-parsed RFCs, the accuracy note."""
    fields = {"_source": str(parsed.source)}
    if parsed.source == SourceFormat.TEXT:
        fields["_sourceNote"] = get_text_source_note(context)
    return fields


def build_result(params: dict[str, Any], data: dict[str, Any]) -> ToolResult:
    """Wrap handler output with token estimates for the request and response."""
    return ToolResult(
        data=data,
        input_tokens=count_tokens(json.dumps(params, default=str)),
        output_tokens=count_tokens(json.dumps(data, default=str)),
    )
