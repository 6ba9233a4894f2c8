"""Tools for exact lookups of SDK exports and source files."""

from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import Field

from pushchain_mcp.errors import NotFoundError
from pushchain_mcp.tools import ToolDefinition, ToolParameters
from pushchain_mcp_server.lookup import describe_export, describe_type, find_exports
from pushchain_mcp_server.store import DataStore
from pushchain_mcp_server.tools.common import (
    SOURCE_PATH_MESSAGE,
    SOURCE_PATH_PATTERN,
    read_only_annotations,
    source_language,
)


class GetSdkApiParams(ToolParameters):
    """Parameters for get_sdk_api."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description=(
            "Name of the API (e.g., 'PushClient', 'createUniversalSigner', "
            "'UniversalAccount')"
        ),
    )
    package: Literal["core", "ui-kit", "any"] = Field(
        "any",
        description=(
            "Package to search in: 'core' for @pushchain/core, 'ui-kit' for "
            "@pushchain/ui-kit, or 'any' to search both"
        ),
    )


class TypeDefinitionParams(ToolParameters):
    """Parameters for get_type_definition."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Type or interface name (e.g., 'UniversalAccount', 'SignerOptions')",
    )


class SourceFileParams(ToolParameters):
    """Parameters for get_source_file."""

    constraint_messages: ClassVar[dict[str, str]] = {"path": SOURCE_PATH_MESSAGE}

    path: str = Field(
        ...,
        min_length=1,
        max_length=500,
        pattern=SOURCE_PATH_PATTERN,
        description="File path (e.g., 'packages/core/src/lib/push-client/push-client.ts')",
    )


def get_sdk_api_tool(store: DataStore) -> ToolDefinition:
    """Create the get_sdk_api tool."""

    def handler(params: GetSdkApiParams) -> dict[str, object]:
        package = None if params.package == "any" else params.package
        records = find_exports(store, params.name, package)
        if not records:
            raise NotFoundError(
                f'API "{params.name}" not found. '
                "Try 'search_sdk' for partial matches or 'list_all_exports' to "
                "browse every export.",
                details={"name": params.name, "package": params.package},
            )
        return {
            "name": params.name,
            "total": len(records),
            "matches": [describe_export(store, record) for record in records],
        }

    return ToolDefinition(
        name="get_sdk_api",
        description=(
            "Get detailed information about any exported API from @pushchain/core "
            "or @pushchain/ui-kit.\n\n"
            "Returns the export kind, owning package, file and extracted definition.\n\n"
            "Args:\n"
            "  - name (required string): API name (e.g., 'PushClient')\n"
            "  - package (optional string): 'core', 'ui-kit', or 'any' (default)\n\n"
            'Use when: "How do I use PushClient?", "Show me UniversalAccount type"'
        ),
        parameters_model=GetSdkApiParams,
        handler=handler,
        annotations=read_only_annotations(open_world=False),
    )


def get_type_definition_tool(store: DataStore) -> ToolDefinition:
    """Create the get_type_definition tool."""

    def handler(params: TypeDefinitionParams) -> dict[str, object]:
        records = find_exports(store, params.name, kinds=("type", "interface"))
        if not records:
            raise NotFoundError(
                f'Type "{params.name}" not found. '
                "Try 'search_sdk' with scope 'types' to find similar types.",
                details={"name": params.name},
            )
        return {
            "name": params.name,
            "total": len(records),
            "matches": [describe_type(store, record) for record in records],
            "note": "Use get_source_file with the file path for the complete source",
        }

    return ToolDefinition(
        name="get_type_definition",
        description=(
            "Get a TypeScript type or interface definition.\n\n"
            "Args:\n"
            "  - name (required string): Type/interface name "
            "(e.g., 'UniversalAccount')\n\n"
            'Use when: "What fields does UniversalAccount have?"'
        ),
        parameters_model=TypeDefinitionParams,
        handler=handler,
        annotations=read_only_annotations(open_world=False),
    )


def get_source_file_tool(store: DataStore) -> ToolDefinition:
    """Create the get_source_file tool."""

    def handler(params: SourceFileParams) -> str:
        source = store.sources.get(params.path)
        if source is None:
            raise NotFoundError(
                f'File "{params.path}" not found in @pushchain/core or '
                "@pushchain/ui-kit. Use 'search_sdk' with scope 'code' to locate "
                "files by path.",
                details={"path": params.path},
            )
        language = source_language(source.path)
        return f"# {source.path}\n\n```{language}\n{source.text}\n```"

    return ToolDefinition(
        name="get_source_file",
        description=(
            "Get the complete source code of a file from @pushchain/core or "
            "@pushchain/ui-kit.\n\n"
            "Args:\n"
            "  - path (required string): File path "
            "(e.g., 'packages/core/src/lib/push-client/push-client.ts')\n\n"
            'Use when: "Show me the complete PushClient source"'
        ),
        parameters_model=SourceFileParams,
        handler=handler,
        annotations=read_only_annotations(open_world=False),
    )
