"""Structure tool handlers for RFC document navigation.

Handles:
- get_rfc_structure: Section hierarchy and metadata
- get_definitions: Term definitions, optionally filtered
- get_rfc_dependencies: Normative and informative references
- get_related_sections: Sections cross-referenced from a section
"""

from typing import Any

from ...models import (
    GetDefinitionsParams,
    GetDependenciesParams,
    GetRelatedSectionsParams,
    GetRFCStructureParams,
    ToolResult,
)
from ..core.document import Reference, Section
from ..core.section import collect_cross_references, find_section
from .base import HandlerContext, build_result, source_fields


def simplify_section(section: Section, include_content: bool) -> dict[str, Any]:
    """Section outline entry; subsections only when present."""
    result: dict[str, Any] = {"number": section.number, "title": section.title}
    if section.anchor is not None:
        result["anchor"] = section.anchor
    if include_content:
        result["content"] = [block.to_dict() for block in section.content]
    if section.subsections:
        result["subsections"] = [simplify_section(s, include_content) for s in section.subsections]
    return result


async def handle_get_rfc_structure(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Return the section hierarchy and metadata of an RFC.

    Args:
        params: Dict containing:
            - rfc: RFC number
            - includeContent: Include content blocks of every section (default False)

    Returns:
        ToolResult with metadata, sections and reference counts
    """
    args = GetRFCStructureParams.model_validate(params)
    parsed = await ctx.service.get_parsed_rfc(args.rfc)
    document = parsed.data

    data = {
        "rfc": args.rfc,
        "metadata": document.metadata.to_dict(),
        "sections": [simplify_section(s, args.include_content) for s in document.sections],
        "referenceCount": {
            "normative": len(document.references.normative),
            "informative": len(document.references.informative),
        },
        **source_fields(parsed, "structure"),
    }
    return build_result(params, data)


async def handle_get_definitions(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Return term definitions, filtered by a case-insensitive substring.

    The term is matched against both the defined term and its definition.
    """
    args = GetDefinitionsParams.model_validate(params)
    parsed = await ctx.service.get_parsed_rfc(args.rfc)

    definitions = parsed.data.definitions
    if args.term:
        needle = args.term.lower()
        definitions = [
            d for d in definitions if needle in d.term.lower() or needle in d.definition.lower()
        ]

    data: dict[str, Any] = {"rfc": args.rfc}
    if args.term:
        data["searchTerm"] = args.term
    data.update(
        {
            "count": len(definitions),
            "definitions": [d.to_dict() for d in definitions],
            **source_fields(parsed, "definitions"),
        }
    )
    return build_result(params, data)


def _dependency(ref: Reference) -> dict[str, Any]:
    return {"rfcNumber": ref.rfc_number, "title": ref.title, "anchor": ref.anchor}


async def handle_get_rfc_dependencies(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Return the RFCs and drafts an RFC references.

    Args:
        params: Dict containing:
            - rfc: RFC number
            - includeReferencedBy: Also report citing RFCs (not available yet)

    Returns:
        ToolResult with normative and informative dependency lists
    """
    args = GetDependenciesParams.model_validate(params)
    parsed = await ctx.service.get_parsed_rfc(args.rfc)
    references = parsed.data.references

    data: dict[str, Any] = {
        "rfc": args.rfc,
        "normative": [_dependency(ref) for ref in references.normative],
        "informative": [_dependency(ref) for ref in references.informative],
    }
    # TODO: fill referencedBy from the Datatracker relationship API
    if args.include_referenced_by:
        data["referencedBy"] = []
        data["_note"] = "referencedBy is not implemented (requires IETF Datatracker API)"
    data.update(source_fields(parsed, "dependencies"))
    return build_result(params, data)


async def handle_get_related_sections(
    params: dict[str, Any],
    ctx: HandlerContext,
) -> ToolResult:
    """Return the sections a section cross-references.

    Returns:
        ToolResult with related sections, or an error entry when the section
        does not exist
    """
    args = GetRelatedSectionsParams.model_validate(params)
    parsed = await ctx.service.get_parsed_rfc(args.rfc)
    sections = parsed.data.sections

    target = find_section(sections, args.section)
    if target is None:
        return build_result(params, {"error": f"Section {args.section} not found"})

    related = []
    for number in collect_cross_references(target):
        section = find_section(sections, number)
        related.append({"number": number, "title": section.title if section else "Unknown"})

    data = {
        "rfc": args.rfc,
        "section": args.section,
        "title": target.title,
        "relatedSections": related,
        **source_fields(parsed, "sections"),
    }
    return build_result(params, data)
