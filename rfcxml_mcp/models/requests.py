"""Request models (Pydantic *Params classes) for RFCXML MCP Server."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import RFC_NUMBER_MAX, RFC_NUMBER_MIN
from .enums import RequirementLevel, Role, ToolName

# ============ CORE REQUEST MODELS ============


class MCPRequest(BaseModel):
    """MCP tool execution request."""

    tool: ToolName = Field(..., description="The RFC tool to execute")
    params: dict[str, Any] = Field(default_factory=dict, description="Tool parameters")


class RFCParams(BaseModel):
    """Base parameters shared by every RFC tool.

    Tool arguments arrive in camelCase (``includeContent``); the snake_case
    field names are accepted as well.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    rfc: int = Field(
        ...,
        ge=RFC_NUMBER_MIN,
        le=RFC_NUMBER_MAX,
        description="RFC number (e.g. 6455)",
    )

    @field_validator("rfc", mode="before")
    @classmethod
    def reject_boolean_rfc(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("Invalid parameter 'rfc': must be an integer")
        return value


# ============ STRUCTURE PARAMS ============


class GetRFCStructureParams(RFCParams):
    """Parameters for get_rfc_structure tool."""

    include_content: bool = Field(
        default=False,
        alias="includeContent",
        description="Include section content blocks",
    )


class GetRequirementsParams(RFCParams):
    """Parameters for get_requirements tool."""

    section: str | None = Field(default=None, description="Section filter (e.g. '5.5.1')")
    level: RequirementLevel | None = Field(default=None, description="Requirement level filter")
    include_subsections: bool = Field(
        default=True,
        alias="includeSubsections",
        description="Include requirements from subsections of the filtered section",
    )


class GetDefinitionsParams(RFCParams):
    """Parameters for get_definitions tool."""

    term: str | None = Field(default=None, description="Search term (substring, case-insensitive)")


# ============ RELATIONSHIP PARAMS ============


class GetDependenciesParams(RFCParams):
    """Parameters for get_rfc_dependencies tool."""

    include_referenced_by: bool = Field(
        default=False,
        alias="includeReferencedBy",
        description="Include RFCs that reference this RFC",
    )


class GetRelatedSectionsParams(RFCParams):
    """Parameters for get_related_sections tool."""

    section: str = Field(..., min_length=1, description="Base section number or anchor")


# ============ VERIFICATION PARAMS ============


class GenerateChecklistParams(RFCParams):
    """Parameters for generate_checklist tool."""

    role: Role = Field(default=Role.BOTH, description="Implementation role")
    sections: list[str] | None = Field(
        default=None, description="Sections to include (all when omitted)"
    )
    include_subsections: bool = Field(
        default=True,
        alias="includeSubsections",
        description="Include subsections of the listed sections",
    )


class ValidateStatementParams(RFCParams):
    """Parameters for validate_statement tool."""

    statement: str = Field(
        ..., min_length=1, description="Implementation behaviour to check against the RFC"
    )
