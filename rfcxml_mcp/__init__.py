"""RFCXML MCP Server - structured access to IETF RFC requirements."""

__version__ = "0.3.0"
