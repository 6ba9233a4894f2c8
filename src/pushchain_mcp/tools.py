"""Tool definitions and argument validation for the Push Chain MCP server."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from pushchain_mcp.errors import ArgumentValidationError

ToolPayload = Union[str, Dict[str, Any], list]
P = TypeVar("P", bound="ToolParameters")

_PATTERN_ERRORS = {"string_pattern_mismatch"}


class ToolParameters(BaseModel):
    """Base parameters schema for MCP tools.

    Unknown fields are always rejected. Subclasses may declare
    ``constraint_messages`` to replace pydantic's raw regex text with a
    readable description of the expected format.
    """

    model_config = ConfigDict(extra="forbid")

    constraint_messages: ClassVar[dict[str, str]] = {}

    @classmethod
    def parse(cls: type[P], raw: Dict[str, Any] | None) -> P:
        """Validate raw arguments into a parameters instance.

        Args:
            raw: Argument mapping supplied by the caller.

        Raises:
            ArgumentValidationError: If any field violates the schema.

        Returns:
            Validated and normalized parameters.
        """

        try:
            return cls.model_validate(raw or {})
        except ValidationError as error:
            issues = _describe_issues(cls, error)
            raise ArgumentValidationError(
                format_validation_error(issues), details=issues
            ) from error


def _describe_issues(
    model: type[ToolParameters], error: ValidationError
) -> list[dict[str, str]]:
    issues: list[dict[str, str]] = []
    for issue in error.errors():
        path = ".".join(str(part) for part in issue["loc"]) or "(root)"
        message = issue["msg"]
        if issue["type"] in _PATTERN_ERRORS:
            message = model.constraint_messages.get(path, message)
        issues.append({"field": path, "message": message})
    return issues


def format_validation_error(issues: list[dict[str, str]]) -> str:
    """Render validation issues as one user-facing explanation."""

    if not issues:
        return (
            "Error: Invalid input parameters. Please check your input and try again."
        )
    lines = [f"  - {issue['field']}: {issue['message']}" for issue in issues]
    return (
        "Error: Invalid input parameters:\n"
        + "\n".join(lines)
        + "\n\nPlease check the parameter types and constraints, then try again."
    )


@dataclass
class ToolDefinition:
    """Description of a tool that can be registered with the server.

    Attributes:
        name: Unique name of the tool.
        description: Human-readable description of the tool purpose.
        parameters_model: Pydantic model used to validate input parameters.
        handler: Callable that receives the validated parameters model and
            returns either preformatted text or a JSON-serializable payload.
        annotations: MCP behaviour hints advertised with the tool.
    """

    name: str
    description: str
    parameters_model: type[ToolParameters]
    handler: Callable[[Any], ToolPayload]
    annotations: Dict[str, bool] = field(default_factory=dict)

    def validate(self, parameters: Dict[str, Any] | None) -> ToolParameters:
        """Validate and coerce incoming tool parameters once per call.

        Args:
            parameters: Input parameters provided for the tool.

        Raises:
            ArgumentValidationError: If parameter validation fails.

        Returns:
            Validated parameters model with defaults applied.
        """

        return self.parameters_model.parse(parameters)

    def input_schema(self) -> Dict[str, Any]:
        """Return the JSON schema enforced by :meth:`validate`."""

        return self.parameters_model.model_json_schema()

    def metadata(self) -> Dict[str, Any]:
        """Return a discovery-friendly description of the tool."""

        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
            "annotations": dict(self.annotations),
        }
