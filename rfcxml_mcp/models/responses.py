"""Response models for RFCXML MCP Server."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ToolResult(BaseModel):
    """Internal result of a tool handler before it is wrapped for transport."""

    data: Any = Field(..., description="Tool result payload (JSON-serializable)")
    input_tokens: int = Field(default=0, ge=0, description="Estimated input tokens")
    output_tokens: int = Field(default=0, ge=0, description="Estimated output tokens")


class UsageInfo(BaseModel):
    """Token and latency accounting for one tool call."""

    input_tokens: int = Field(default=0, ge=0, description="Estimated input tokens")
    output_tokens: int = Field(default=0, ge=0, description="Estimated output tokens")
    latency_ms: int = Field(default=0, ge=0, description="Execution latency in milliseconds")


class MCPResponse(BaseModel):
    """MCP tool execution response for the REST endpoint."""

    success: bool = Field(..., description="Whether the tool executed successfully")
    result: Any = Field(default=None, description="Tool result payload")
    error: str | None = Field(default=None, description="Error message when success is False")
    usage: UsageInfo = Field(default_factory=UsageInfo, description="Usage accounting")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Server version")
    timestamp: datetime = Field(..., description="Current server time")
    cached_rfcs: int = Field(default=0, ge=0, description="Parsed RFCs currently cached")
