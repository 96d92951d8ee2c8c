"""RFC engine: dispatches MCP tool calls to their handlers."""

import logging
from typing import Any

from .engine.handlers import (
    HandlerContext,
    HandlerFunc,
    handle_generate_checklist,
    handle_get_definitions,
    handle_get_related_sections,
    handle_get_requirements,
    handle_get_rfc_dependencies,
    handle_get_rfc_structure,
    handle_validate_statement,
)
from .models import ToolName, ToolResult
from .services.rfc_service import RFCService

logger = logging.getLogger(__name__)


class RFCEngine:
    """Executes RFC tools against a shared RFCService."""

    def __init__(self, service: RFCService):
        self.service = service
        self._handlers: dict[ToolName, HandlerFunc] = {
            ToolName.GET_RFC_STRUCTURE: handle_get_rfc_structure,
            ToolName.GET_REQUIREMENTS: handle_get_requirements,
            ToolName.GET_DEFINITIONS: handle_get_definitions,
            ToolName.GET_RFC_DEPENDENCIES: handle_get_rfc_dependencies,
            ToolName.GET_RELATED_SECTIONS: handle_get_related_sections,
            ToolName.GENERATE_CHECKLIST: handle_generate_checklist,
            ToolName.VALIDATE_STATEMENT: handle_validate_statement,
        }

    def _context(self) -> HandlerContext:
        return HandlerContext(service=self.service)

    async def execute(self, tool: ToolName | str, params: dict[str, Any]) -> ToolResult:
        """Execute a tool.

        Args:
            tool: Tool name
            params: Raw tool arguments

        Returns:
            ToolResult from the handler

        Raises:
            ValueError: Unknown tool name
            pydantic.ValidationError: Invalid arguments
            RFCFetchError: The RFC could not be retrieved
        """
        try:
            tool_name = ToolName(tool)
        except ValueError:
            raise ValueError(f"Unknown tool: {tool}") from None

        logger.info(f"Executing {tool_name} with {params}")
        return await self._handlers[tool_name](params, self._context())
