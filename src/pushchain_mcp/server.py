"""Transport-agnostic MCP tool registry and dispatcher.

Every tool call flows through :meth:`MCPServer.call_tool`, which resolves the
tool, validates arguments, runs the handler, bounds the response text and
wraps the outcome in a :class:`ToolResult`. Transport adapters decide whether
a failed result is rendered as an error envelope or raised as a protocol
error.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from mcp.shared.exceptions import McpError
from mcp.types import ErrorData

from pushchain_mcp.errors import (
    InternalError,
    MCPError,
    NotFoundError,
    UnknownToolError,
)
from pushchain_mcp.formatting import (
    CHARACTER_LIMIT,
    enforce_character_limit,
    to_json_text,
)
from pushchain_mcp.tools import ToolDefinition, ToolPayload

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Result returned by tool execution.

    Attributes:
        name: Name of the tool that produced the result.
        text: Response text delivered to the caller.
        is_error: Whether the envelope is flagged as an error.
        error: Error behind a failed or not-found result, if any.
        truncated: Whether the character ceiling cut the text.

    """

    name: str
    text: str
    is_error: bool = False
    error: MCPError | None = None
    truncated: bool = False

    @property
    def not_found(self) -> bool:
        return isinstance(self.error, NotFoundError)

    def to_envelope(self) -> dict[str, Any]:
        """Return the tool-call response envelope.

        Returns:
            Mapping with a single text content item and the error flag.

        """
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }

    def to_json(self) -> str:
        """Serialize the envelope to JSON.

        Returns:
            JSON representation of the tool result envelope.

        """
        return json.dumps(self.to_envelope())

    def to_protocol_result(self) -> dict[str, Any]:
        """Return the envelope or raise the matching protocol error.

        Raises:
            McpError: If the result failed with an error that carries a
                JSON-RPC error code.

        Returns:
            The envelope for successful and envelope-only failures.

        """
        if self.is_error and self.error is not None and self.error.code is not None:
            raise McpError(ErrorData(code=self.error.code, message=self.text))
        return self.to_envelope()


class MCPServer:
    """In-memory registry and dispatcher for MCP tools.

    The server tracks registered tools and runs each call through validation,
    lookup and response bounding. It is free of transport details so the same
    pipeline backs the FastMCP adapter and the command-line interface.
    """

    def __init__(self, *, character_limit: int = CHARACTER_LIMIT) -> None:
        """Initialize an empty server registry."""
        self._tools: dict[str, ToolDefinition] = {}
        self.character_limit = character_limit

    def register_tool(self, tool: ToolDefinition) -> None:
        """Register a tool with the server.

        Args:
            tool: Tool definition to register.

        Raises:
            ValueError: If a tool with the same name is already registered.

        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def register_tools(self, *tools: ToolDefinition) -> None:
        """Register multiple tools at once.

        Args:
            *tools: Collection of tool definitions to register.

        """
        for tool in tools:
            self.register_tool(tool)

    def available_tools(self) -> list[str]:
        """List the names of registered tools.

        Returns:
            Sorted list of tool names.

        """
        return sorted(self._tools)

    def get_tool(self, name: str) -> ToolDefinition:
        """Return a registered tool.

        Raises:
            UnknownToolError: If the tool name is not registered.

        """
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(
                f"Error: Unknown tool '{name}'. Available tools: "
                + ", ".join(self.available_tools()),
                details={"tool": name},
            ) from None

    def call_tool(
        self, name: str, arguments: dict[str, Any] | None = None
    ) -> ToolResult:
        """Execute a registered tool and wrap the outcome.

        Args:
            name: Name of the registered tool to execute.
            arguments: Raw arguments supplied by the caller.

        Returns:
            ToolResult describing success, not-found or failure. This method
            does not raise for tool failures.

        """
        try:
            tool = self.get_tool(name)
        except UnknownToolError as error:
            logger.debug("Rejected call to unknown tool %r", name)
            return ToolResult(name=name, text=error.message, is_error=True, error=error)

        try:
            params = tool.validate(arguments)
            payload = tool.handler(params)
        except NotFoundError as error:
            logger.debug("Tool %s found no match: %s", name, error.message)
            return self._bounded(name, error.message, error=error)
        except MCPError as error:
            logger.debug("Tool %s failed with %s", name, error.error_type)
            return ToolResult(name=name, text=error.message, is_error=True, error=error)
        except Exception:
            logger.exception("Unexpected failure while running tool %s", name)
            error = InternalError(
                f"Error: Tool '{name}' failed unexpectedly. "
                "The failure has been logged; please retry or try a different tool.",
                details={"tool": name},
            )
            return ToolResult(name=name, text=error.message, is_error=True, error=error)

        text = payload if isinstance(payload, str) else to_json_text(payload)
        return self._bounded(name, text)

    def _bounded(
        self, name: str, text: str, *, error: MCPError | None = None
    ) -> ToolResult:
        limited = enforce_character_limit(text, self.character_limit)
        if limited.truncated:
            logger.info(
                "Truncated %s response from %d characters",
                name,
                limited.original_length,
            )
        return ToolResult(
            name=name, text=limited.text, error=error, truncated=limited.truncated
        )

    def to_catalog(self) -> dict[str, dict[str, Any]]:
        """Produce a catalog for discovery.

        Returns:
            Mapping of tool names to their metadata.

        """
        return {name: tool.metadata() for name, tool in self._tools.items()}
