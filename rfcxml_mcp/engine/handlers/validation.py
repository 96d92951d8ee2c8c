"""Statement validation tool handler.

Handles:
- validate_statement: Check an implementation statement against RFC requirements
"""

from typing import Any

from ...models import SourceFormat, ToolResult, ValidateStatementParams
from ..extraction import extract_requirements
from ..scoring import build_suggestions, match_statement
from .base import HandlerContext, build_result, source_fields


async def handle_validate_statement(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Validate an implementation statement against the requirements of an RFC.

    Every requirement of the RFC is scored against the statement; conflicts
    are reported for requirements addressed to the same actor.

    Args:
        params: Dict containing:
            - rfc: RFC number
            - statement: Free-form description of implementation behaviour

    Returns:
        ToolResult with detected level/subject, matching requirements,
        conflicts and refinement suggestions
    """
    args = ValidateStatementParams.model_validate(params)
    parsed = await ctx.service.get_parsed_rfc(args.rfc)

    requirements = extract_requirements(
        parsed.data.sections, parse_components=parsed.source == SourceFormat.XML
    )
    result = match_statement(args.statement, requirements)

    data: dict[str, Any] = {
        "rfc": args.rfc,
        "statement": args.statement,
        "analysis": {
            "detectedLevel": result.statement_level,
            "detectedSubject": result.statement_subject,
        },
        "isValid": not result.conflicts,
        "matchingRequirements": [m.to_dict() for m in result.matches],
        "conflicts": [c.to_dict() for c in result.conflicts],
    }
    suggestions = build_suggestions(result)
    if suggestions:
        data["suggestions"] = suggestions
    data.update(source_fields(parsed, "validation"))
    return build_result(params, data)
