"""Tests for the MCP server registry and dispatcher."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

import pytest
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, METHOD_NOT_FOUND
from pydantic import Field

from pushchain_mcp.errors import (
    ArgumentValidationError,
    InternalError,
    NotFoundError,
    UnknownToolError,
    UpstreamError,
)
from pushchain_mcp.formatting import truncation_notice
from pushchain_mcp.server import MCPServer
from pushchain_mcp.tools import ToolDefinition, ToolParameters


class EchoParams(ToolParameters):
    """Parameters for the echo test tool."""

    text: str = Field(..., min_length=1, description="Text to echo back")


def _echo_tool(
    handler: Callable[[EchoParams], Any] | None = None,
) -> ToolDefinition:
    def default_handler(params: EchoParams) -> dict[str, Any]:
        return {"echo": params.text}

    return ToolDefinition(
        name="echo",
        description="Echo the provided text.",
        parameters_model=EchoParams,
        handler=handler or default_handler,
        annotations={"readOnlyHint": True},
    )


class TestMCPServer:
    """Behavioral coverage for MCPServer."""

    def test_register_and_list_tools(self) -> None:
        """Registers a tool and ensures it appears in the catalog."""
        # Arrange
        server = MCPServer()
        echo = _echo_tool()

        # Act
        server.register_tool(echo)

        # Assert
        assert server.available_tools() == ["echo"]
        catalog = server.to_catalog()
        assert catalog["echo"]["description"] == echo.description
        assert catalog["echo"]["inputSchema"]["additionalProperties"] is False
        assert catalog["echo"]["annotations"] == {"readOnlyHint": True}

    def test_prevents_duplicate_tool_names(self) -> None:
        """Duplicate tool registrations raise a ValueError."""
        # Arrange
        server = MCPServer()
        server.register_tool(_echo_tool())

        # Act / Assert
        with pytest.raises(ValueError):
            server.register_tool(_echo_tool())

    def test_runs_registered_tool(self) -> None:
        """Executing a registered tool returns its payload as JSON text."""
        # Arrange
        server = MCPServer()
        server.register_tool(_echo_tool())

        # Act
        result = server.call_tool("echo", {"text": "hello"})

        # Assert
        assert result.name == "echo"
        assert result.is_error is False
        assert json.loads(result.text) == {"echo": "hello"}
        envelope = json.loads(result.to_json())
        assert envelope["isError"] is False
        assert envelope["content"][0]["type"] == "text"

    def test_handler_receives_the_validated_model(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Arguments are parsed once and handed over as the parameters model."""
        # Arrange
        parse_calls: list[Any] = []
        original_parse = EchoParams.parse

        def counting_parse(raw: dict[str, Any] | None) -> EchoParams:
            parse_calls.append(raw)
            return original_parse(raw)

        monkeypatch.setattr(EchoParams, "parse", counting_parse)
        received: list[Any] = []
        server = MCPServer()
        server.register_tool(_echo_tool(lambda params: received.append(params) or "ok"))

        # Act
        result = server.call_tool("echo", {"text": "once"})

        # Assert
        assert result.is_error is False
        assert parse_calls == [{"text": "once"}]
        assert isinstance(received[0], EchoParams)
        assert received[0].text == "once"

    def test_string_payloads_are_returned_verbatim(self) -> None:
        """Handlers that render text are not JSON encoded again."""
        # Arrange
        server = MCPServer()
        server.register_tool(_echo_tool(lambda params: f"# {params.text}"))

        # Act
        result = server.call_tool("echo", {"text": "Title"})

        # Assert
        assert result.text == "# Title"

    def test_unknown_tool_is_a_distinct_failure(self) -> None:
        """Unknown tools fail before any handler runs."""
        # Arrange
        server = MCPServer()
        calls: list[EchoParams] = []
        server.register_tool(_echo_tool(lambda params: calls.append(params) or "ok"))

        # Act
        result = server.call_tool("not_a_real_tool", {})

        # Assert
        assert result.is_error is True
        assert isinstance(result.error, UnknownToolError)
        assert "Unknown tool 'not_a_real_tool'" in result.text
        assert "echo" in result.text
        assert calls == []
        with pytest.raises(McpError) as error_info:
            result.to_protocol_result()
        assert error_info.value.error.code == METHOD_NOT_FOUND

    def test_rejects_unexpected_parameters(self) -> None:
        """Unknown fields are surfaced as validation failures."""
        # Arrange
        server = MCPServer()
        server.register_tool(_echo_tool())

        # Act
        result = server.call_tool("echo", {"text": "hi", "unexpected": "value"})

        # Assert
        assert result.is_error is True
        assert isinstance(result.error, ArgumentValidationError)
        assert result.text.startswith("Error: Invalid input parameters:")
        assert "unexpected" in result.text
        with pytest.raises(McpError) as error_info:
            result.to_protocol_result()
        assert error_info.value.error.code == INVALID_PARAMS

    def test_not_found_is_a_successful_response(self) -> None:
        """Queries that match nothing are not flagged as errors."""

        # Arrange
        def handler(_params: EchoParams) -> Any:
            raise NotFoundError('API "DoesNotExist123" not found.')

        server = MCPServer()
        server.register_tool(_echo_tool(handler))

        # Act
        result = server.call_tool("echo", {"text": "DoesNotExist123"})

        # Assert
        assert result.is_error is False
        assert result.not_found is True
        assert result.text == 'API "DoesNotExist123" not found.'
        assert result.to_protocol_result()["isError"] is False

    def test_upstream_failures_stay_in_the_envelope(self) -> None:
        """Upstream errors are flagged but carry no protocol error code."""

        # Arrange
        def handler(_params: EchoParams) -> Any:
            raise UpstreamError(
                "Error: GitHub is unreachable.", cause="unreachable", remedy="retry"
            )

        server = MCPServer()
        server.register_tool(_echo_tool(handler))

        # Act
        result = server.call_tool("echo", {"text": "x"})

        # Assert
        assert result.is_error is True
        assert result.to_protocol_result()["isError"] is True
        assert result.error is not None
        assert result.error.to_dict()["error"]["details"]["cause"] == "unreachable"

    def test_unexpected_failures_are_logged_and_hidden(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Internal exceptions become a generic message and a log record."""

        # Arrange
        def handler(_params: EchoParams) -> Any:
            raise RuntimeError("secret stack detail")

        server = MCPServer()
        server.register_tool(_echo_tool(handler))

        # Act
        with caplog.at_level(logging.ERROR, logger="pushchain_mcp.server"):
            result = server.call_tool("echo", {"text": "x"})

        # Assert
        assert result.is_error is True
        assert isinstance(result.error, InternalError)
        assert "secret stack detail" not in result.text
        assert "failed unexpectedly" in result.text
        assert any(
            record.exc_info and "secret stack detail" in str(record.exc_info[1])
            for record in caplog.records
        )

    def test_truncates_long_responses(self) -> None:
        """Responses beyond the ceiling are cut and carry the notice."""
        # Arrange
        server = MCPServer(character_limit=100)
        server.register_tool(_echo_tool(lambda params: params.text))
        text = "x" * 250

        # Act
        result = server.call_tool("echo", {"text": text})

        # Assert
        notice = truncation_notice(250, 100)
        assert result.truncated is True
        assert len(result.text) == 100 + len(notice)
        assert result.text.endswith(notice)
        assert "Original length: 250 characters" in result.text

    def test_responses_at_the_ceiling_are_untouched(self) -> None:
        """Text exactly at the ceiling is returned as is."""
        # Arrange
        server = MCPServer(character_limit=100)
        server.register_tool(_echo_tool(lambda params: params.text))

        # Act
        result = server.call_tool("echo", {"text": "y" * 100})

        # Assert
        assert result.truncated is False
        assert result.text == "y" * 100
