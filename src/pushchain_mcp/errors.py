"""Custom error types for MCP tooling."""

from __future__ import annotations

from typing import ClassVar, TypedDict

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class MCPErrorPayload(TypedDict):
    """Structured JSON payload for MCP errors."""

    error: dict[str, object | None]


class MCPError(Exception):
    """Structured MCP error containing a JSON-friendly payload.

    Subclasses pin ``error_type`` and the JSON-RPC ``code`` used when the error
    is raised as a protocol-level fault. A ``code`` of ``None`` means the error
    is only ever reported inside a tool response envelope.
    """

    error_type: ClassVar[str] = "MCPError"
    code: ClassVar[int | None] = INTERNAL_ERROR

    def __init__(self, message: str, details: object | None = None) -> None:
        """Create a structured MCP error payload."""
        super().__init__(message)
        self.message = message
        self.details = details
        self.error: MCPErrorPayload = {
            "error": {
                "type": self.error_type,
                "message": message,
                "details": details,
            }
        }

    def to_dict(self) -> MCPErrorPayload:
        """Return the structured error payload."""
        return self.error


class ArgumentValidationError(MCPError):
    """Tool arguments violate the declared parameter shape."""

    error_type = "InvalidParams"
    code = INVALID_PARAMS


class UnknownToolError(MCPError):
    """A tool name that is not present in the registry was requested."""

    error_type = "UnknownTool"
    code = METHOD_NOT_FOUND


class NotFoundError(MCPError):
    """A well-formed query matched zero records.

    Reported to callers as a regular response carrying alternatives, never as a
    protocol fault.
    """

    error_type = "NotFound"
    code = None


class UpstreamError(MCPError):
    """A remote dependency failed while serving the request."""

    error_type = "UpstreamError"
    code = None

    def __init__(
        self, message: str, *, cause: str, remedy: str, status: int | None = None
    ) -> None:
        """Create an upstream error describing the cause and a remedy."""
        super().__init__(
            message, details={"cause": cause, "remedy": remedy, "status": status}
        )
        self.cause = cause
        self.remedy = remedy
        self.status = status


class DataIntegrityError(MCPError):
    """Required static artifacts are missing or unreadable."""

    error_type = "DataIntegrityError"


class InternalError(MCPError):
    """Unexpected failure surfaced to callers with a generic message."""

    error_type = "InternalError"
