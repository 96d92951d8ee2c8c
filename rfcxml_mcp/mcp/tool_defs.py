"""MCP Tool Definitions for RFCXML.

This module contains all tool definitions returned by the tools/list method.
Each tool definition includes the schema for its input parameters.

Tool Categories:
    - Structure: get_rfc_structure, get_requirements, get_definitions
    - Relationships: get_rfc_dependencies, get_related_sections
    - Verification: generate_checklist, validate_statement
"""

from ..config import RFC_NUMBER_MAX, RFC_NUMBER_MIN
from ..models.enums import RequirementLevel, Role


_RFC_PROPERTY = {
    "type": "integer",
    "minimum": RFC_NUMBER_MIN,
    "maximum": RFC_NUMBER_MAX,
    "description": "RFC number (e.g. 6455)",
}

TOOL_DEFINITIONS: list[dict] = [
    # ============ Structure Tools ============
    {
        "name": "get_rfc_structure",
        "description": "Get the section hierarchy and metadata of an RFC.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "rfc": _RFC_PROPERTY,
                "includeContent": {
                    "type": "boolean",
                    "default": False,
                    "description": "Include section content blocks",
                },
            },
            "required": ["rfc"],
        },
    },
    {
        "name": "get_requirements",
        "description": "Extract normative requirements (MUST/SHOULD/MAY...) from an RFC as structured data.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "rfc": _RFC_PROPERTY,
                "section": {
                    "type": "string",
                    "description": 'Filter by section number (e.g. "5.5.1" or "section-5.5.1")',
                },
                "level": {
                    "type": "string",
                    "enum": [level.value for level in RequirementLevel],
                    "description": "Filter by requirement level",
                },
                "includeSubsections": {
                    "type": "boolean",
                    "default": True,
                    "description": "Include requirements from subsections of the filtered section",
                },
            },
            "required": ["rfc"],
        },
    },
    {
        "name": "get_definitions",
        "description": "Get term definitions from an RFC.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "rfc": _RFC_PROPERTY,
                "term": {"type": "string", "description": "Search for a specific term"},
            },
            "required": ["rfc"],
        },
    },
    # ============ Relationship Tools ============
    {
        "name": "get_rfc_dependencies",
        "description": "Get the normative and informative references of an RFC.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "rfc": _RFC_PROPERTY,
                "includeReferencedBy": {
                    "type": "boolean",
                    "default": False,
                    "description": "Also include RFCs that reference this RFC",
                },
            },
            "required": ["rfc"],
        },
    },
    {
        "name": "get_related_sections",
        "description": "Get the sections cross-referenced from a given section.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "rfc": _RFC_PROPERTY,
                "section": {"type": "string", "description": "Base section number"},
            },
            "required": ["rfc", "section"],
        },
    },
    # ============ Verification Tools ============
    {
        "name": "generate_checklist",
        "description": "Generate an implementation checklist for an RFC in Markdown.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "rfc": _RFC_PROPERTY,
                "role": {
                    "type": "string",
                    "enum": [role.value for role in Role],
                    "default": "both",
                    "description": "Implementation role",
                },
                "sections": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Sections to include (whole RFC when omitted)",
                },
                "includeSubsections": {
                    "type": "boolean",
                    "default": True,
                    "description": "Include subsections of the listed sections",
                },
            },
            "required": ["rfc"],
        },
    },
    {
        "name": "validate_statement",
        "description": "Check whether an implementation statement complies with the requirements of an RFC.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "rfc": _RFC_PROPERTY,
                "statement": {
                    "type": "string",
                    "description": "Implementation behaviour to check",
                },
            },
            "required": ["rfc", "statement"],
        },
    },
]
