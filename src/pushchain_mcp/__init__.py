"""pushchain_mcp package initialization."""

from pushchain_mcp.errors import MCPError
from pushchain_mcp.server import MCPServer, ToolResult
from pushchain_mcp.tools import ToolDefinition, ToolParameters

__all__ = ["MCPError", "MCPServer", "ToolDefinition", "ToolParameters", "ToolResult"]
