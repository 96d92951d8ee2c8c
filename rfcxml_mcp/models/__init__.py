"""Pydantic models for RFCXML MCP Server request/response schemas.

Import from submodules directly for cleaner imports:

    from rfcxml_mcp.models.enums import ToolName, RequirementLevel
    from rfcxml_mcp.models.requests import GetRequirementsParams
"""

# ============ ENUMS ============
from .enums import (
    CrossReferenceType,
    ListStyle,
    ReferenceType,
    RequirementLevel,
    Role,
    SourceFormat,
    ToolName,
)

# ============ REQUEST MODELS ============
from .requests import (
    GenerateChecklistParams,
    GetDefinitionsParams,
    GetDependenciesParams,
    GetRelatedSectionsParams,
    GetRequirementsParams,
    GetRFCStructureParams,
    MCPRequest,
    RFCParams,
    ValidateStatementParams,
)

# ============ RESPONSE MODELS ============
from .responses import (
    HealthResponse,
    MCPResponse,
    ToolResult,
    UsageInfo,
)

__all__ = [
    # Enums
    "ToolName",
    "RequirementLevel",
    "Role",
    "SourceFormat",
    "ReferenceType",
    "CrossReferenceType",
    "ListStyle",
    # Request models
    "MCPRequest",
    "RFCParams",
    "GetRFCStructureParams",
    "GetRequirementsParams",
    "GetDefinitionsParams",
    "GetDependenciesParams",
    "GetRelatedSectionsParams",
    "GenerateChecklistParams",
    "ValidateStatementParams",
    # Response models
    "ToolResult",
    "UsageInfo",
    "MCPResponse",
    "HealthResponse",
]
