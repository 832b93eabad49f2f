"""
MCP (Model Context Protocol) module.
"""

from digital_twin.mcp.exceptions import (
    MCPError,
    MCPInvalidParamsError,
    MCPInvalidRequestError,
    MCPMethodNotFoundError,
    MCPParseError,
    MCPToolNotFoundError,
)
from digital_twin.mcp.server import MCPServer
from digital_twin.mcp.stdio import serve_stdio
from digital_twin.mcp.tools import create_profile_server
from digital_twin.mcp.types import TextBlock, ToolDefinition, ToolResult

__all__ = [
    "MCPServer",
    "create_profile_server",
    "serve_stdio",
    "TextBlock",
    "ToolDefinition",
    "ToolResult",
    "MCPError",
    "MCPParseError",
    "MCPInvalidRequestError",
    "MCPMethodNotFoundError",
    "MCPToolNotFoundError",
    "MCPInvalidParamsError",
]
