"""Adapters for exposing Push Chain MCP tools and resources via FastMCP."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.resources import Resource
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import (
    CallToolRequest,
    CallToolResult,
    ServerResult,
    TextContent,
    ToolAnnotations,
)

from pushchain_mcp.server import MCPServer
from pushchain_mcp.tools import ToolDefinition
from pushchain_mcp_server.constants import SERVER_NAME
from pushchain_mcp_server.resources import ResourceCatalog, ResourceDescriptor
from pushchain_mcp_server.runtime import Runtime

ERROR_STYLES = ("envelope", "protocol")


class ToolDefinitionAdapter(Tool):
    """Expose a :class:`ToolDefinition` as a FastMCP tool.

    Calls are routed through :meth:`MCPServer.call_tool` so validation,
    not-found handling and the character ceiling behave exactly as they do
    outside FastMCP.
    """

    def __init__(self, definition: ToolDefinition, server: MCPServer) -> None:
        """Create a FastMCP tool wrapper for the provided definition."""
        super().__init__(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema(),
            annotations=ToolAnnotations(**definition.annotations),
            tags=set(),
        )
        self._definition = definition
        self._server = server

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Dispatch the call and convert failures into tool errors."""
        result = self._server.call_tool(self._definition.name, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return ToolResult(content=result.text)


class CatalogResource(Resource):
    """A documentation page or SDK source file read lazily from the catalog."""

    def __init__(self, descriptor: ResourceDescriptor, catalog: ResourceCatalog) -> None:
        """Create a FastMCP resource for one catalog entry."""
        super().__init__(
            uri=descriptor.uri,
            name=descriptor.name,
            description=descriptor.description,
            mime_type=descriptor.mime_type,
        )
        self._catalog = catalog
        self._catalog_uri = descriptor.uri

    async def read(self) -> str:
        """Return the resource text, bounded by the character ceiling."""
        return self._catalog.read_resource(self._catalog_uri).text


def to_fastmcp_tools(
    tool_definitions: Sequence[ToolDefinition], server: MCPServer
) -> list[Tool]:
    """Convert tool definitions into FastMCP-compatible tools."""
    return [ToolDefinitionAdapter(definition, server) for definition in tool_definitions]


def install_protocol_errors(app: FastMCP, server: MCPServer) -> None:
    """Answer tools/call directly so coded failures become JSON-RPC errors.

    FastMCP folds exceptions raised inside a tool into an error result, so
    the request handler itself is replaced and
    :meth:`ToolResult.to_protocol_result` raises ``McpError`` to the session.
    Failures without a JSON-RPC code still come back as an error envelope.
    """

    async def handle_call_tool(request: CallToolRequest) -> ServerResult:
        result = server.call_tool(request.params.name, request.params.arguments or {})
        result.to_protocol_result()
        return ServerResult(
            CallToolResult(
                content=[TextContent(type="text", text=result.text)],
                isError=result.is_error,
            )
        )

    app._mcp_server.request_handlers[CallToolRequest] = handle_call_tool


def build_fastmcp_app(
    runtime: Runtime, *, error_style: str = "envelope"
) -> tuple[FastMCP, list[ToolDefinition]]:
    """Create a FastMCP server instance with all Push Chain tools registered.

    Args:
        runtime: Loaded data, tools and resource catalog to expose.
        error_style: ``"envelope"`` reports every failure as an error result;
            ``"protocol"`` raises JSON-RPC errors for invalid arguments and
            unknown tools.
    """
    if error_style not in ERROR_STYLES:
        raise ValueError(f"Unknown error style '{error_style}'")
    app = FastMCP(
        name=SERVER_NAME,
        instructions=(
            "Push Chain documentation and @pushchain/core / @pushchain/ui-kit SDK "
            "reference exposed over the Model Context Protocol."
        ),
    )
    for tool in to_fastmcp_tools(runtime.tools, runtime.server):
        app.add_tool(tool)
    for descriptor in runtime.resources.list_resources():
        app.add_resource(CatalogResource(descriptor, runtime.resources))
    if error_style == "protocol":
        install_protocol_errors(app, runtime.server)
    return app, runtime.tools
