"""Enumeration types for RFCXML MCP Server."""

from enum import StrEnum


class ToolName(StrEnum):
    """Available RFC tools."""

    # Structure
    GET_RFC_STRUCTURE = "get_rfc_structure"
    GET_REQUIREMENTS = "get_requirements"
    GET_DEFINITIONS = "get_definitions"
    # Relationships
    GET_RFC_DEPENDENCIES = "get_rfc_dependencies"
    GET_RELATED_SECTIONS = "get_related_sections"
    # Verification support
    GENERATE_CHECKLIST = "generate_checklist"
    VALIDATE_STATEMENT = "validate_statement"


class RequirementLevel(StrEnum):
    """BCP 14 (RFC 2119 / RFC 8174) requirement keywords."""

    MUST = "MUST"
    MUST_NOT = "MUST NOT"
    REQUIRED = "REQUIRED"
    SHALL = "SHALL"
    SHALL_NOT = "SHALL NOT"
    SHOULD = "SHOULD"
    SHOULD_NOT = "SHOULD NOT"
    RECOMMENDED = "RECOMMENDED"
    NOT_RECOMMENDED = "NOT RECOMMENDED"
    MAY = "MAY"
    OPTIONAL = "OPTIONAL"


class Role(StrEnum):
    """Implementation role used to filter checklists."""

    CLIENT = "client"
    SERVER = "server"
    BOTH = "both"


class SourceFormat(StrEnum):
    """Format the parsed RFC was obtained from."""

    XML = "xml"  # RFCXML v3 (or v2), high accuracy
    TEXT = "text"  # Plain text fallback for older RFCs


class ReferenceType(StrEnum):
    """Bibliographic reference classification."""

    NORMATIVE = "normative"
    INFORMATIVE = "informative"


class CrossReferenceType(StrEnum):
    """Target kind of an in-document cross-reference."""

    RFC = "rfc"
    SECTION = "section"
    FIGURE = "figure"
    TABLE = "table"
    EXTERNAL = "external"


class ListStyle(StrEnum):
    """Style of a list content block."""

    SYMBOLS = "symbols"
    NUMBERS = "numbers"
    LETTERS = "letters"
    HANGING = "hanging"
