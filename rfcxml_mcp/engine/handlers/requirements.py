"""Requirement tool handlers.

Handles:
- get_requirements: Normative requirements with section/level filters
- generate_checklist: Markdown implementation checklist per role
"""

from collections import Counter
from typing import Any

from ...models import GenerateChecklistParams, GetRequirementsParams, SourceFormat, ToolResult
from ..extraction import (
    RequirementFilter,
    extract_requirements,
    generate_checklist,
    generate_checklist_markdown,
    get_checklist_stats,
)
from .base import HandlerContext, build_result, source_fields


async def handle_get_requirements(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Extract normative requirements (MUST/SHOULD/MAY...) from an RFC.

    Args:
        params: Dict containing:
            - rfc: RFC number
            - section: Optional section filter ("3.5" or "section-3.5")
            - level: Optional requirement level filter
            - includeSubsections: Include subsections of the filtered section (default True)

    Returns:
        ToolResult with the applied filter, per-level stats and requirements
    """
    args = GetRequirementsParams.model_validate(params)
    parsed = await ctx.service.get_parsed_rfc(args.rfc)

    requirements = extract_requirements(
        parsed.data.sections,
        RequirementFilter(
            section=args.section,
            include_subsections=args.include_subsections,
            level=args.level,
        ),
        parse_components=parsed.source == SourceFormat.XML,
    )
    by_level = Counter(str(r.level) for r in requirements)

    data = {
        "rfc": args.rfc,
        "filter": {
            "section": args.section or "all",
            "level": str(args.level) if args.level else "all",
        },
        "stats": {"total": len(requirements), "byLevel": dict(by_level)},
        "requirements": [r.to_dict() for r in requirements],
        **source_fields(parsed, "requirements"),
    }
    return build_result(params, data)


async def handle_generate_checklist(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Generate a Markdown implementation checklist.

    Args:
        params: Dict containing:
            - rfc: RFC number
            - role: client, server or both (default both)
            - sections: Optional list of sections to include
            - includeSubsections: Include subsections of listed sections (default True)

    Returns:
        ToolResult with checklist stats and Markdown
    """
    args = GenerateChecklistParams.model_validate(params)
    parsed = await ctx.service.get_parsed_rfc(args.rfc)

    requirements = extract_requirements(
        parsed.data.sections,
        RequirementFilter(sections=args.sections, include_subsections=args.include_subsections),
        parse_components=parsed.source == SourceFormat.XML,
    )
    checklist = generate_checklist(args.rfc, parsed.data.metadata.title, requirements, args.role)

    data = {
        "rfc": args.rfc,
        "role": str(args.role),
        "stats": get_checklist_stats(checklist),
        "markdown": generate_checklist_markdown(checklist),
        **source_fields(parsed, "checklist"),
    }
    return build_result(params, data)
