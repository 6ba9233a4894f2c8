"""Aggregate listings of SDK packages, exports, classes and components."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pushchain_mcp.errors import NotFoundError
from pushchain_mcp.tools import ToolDefinition, ToolParameters
from pushchain_mcp_server.constants import SDK_PACKAGES
from pushchain_mcp_server.lookup import (
    core_classes,
    export_to_dict,
    list_exports,
    package_info,
    ui_components,
)
from pushchain_mcp_server.store import DataStore
from pushchain_mcp_server.tools.common import (
    SEE_SOURCE_NOTE,
    NoParameters,
    SdkPackage,
    read_only_annotations,
)


class PackageInfoParams(ToolParameters):
    """Parameters for get_package_info."""

    package: SdkPackage = Field(
        ...,
        description="Package name: 'core' for @pushchain/core or 'ui-kit' for @pushchain/ui-kit",
    )


class ListExportsParams(ToolParameters):
    """Parameters for list_all_exports."""

    package: Literal["core", "ui-kit", "both"] = Field(
        ..., description="Package to list exports from: 'core', 'ui-kit', or 'both'"
    )
    type: Literal["all", "functions", "classes", "types", "interfaces", "constants"] = (
        Field(
            "all",
            description=(
                "Filter by export type: 'all', 'functions', 'classes', 'types', "
                "'interfaces', or 'constants'"
            ),
        )
    )


def get_package_info_tool(store: DataStore) -> ToolDefinition:
    """Create the get_package_info tool."""

    def handler(params: PackageInfoParams) -> dict[str, object]:
        info = package_info(store, params.package)
        if info is None:
            raise NotFoundError(
                f'Package "{SDK_PACKAGES[params.package]}" has no metadata in the '
                "loaded SDK data. Use 'list_all_exports' to browse its exports.",
                details={"package": params.package},
            )
        return info

    return ToolDefinition(
        name="get_package_info",
        description=(
            "Get information about @pushchain/core or @pushchain/ui-kit.\n\n"
            "Returns package metadata, dependencies, and export statistics.\n\n"
            "Args:\n"
            "  - package (required string): 'core' or 'ui-kit'\n\n"
            'Use when: "What\'s in @pushchain/core?"'
        ),
        parameters_model=PackageInfoParams,
        handler=handler,
        annotations=read_only_annotations(open_world=False),
    )


def list_all_exports_tool(store: DataStore) -> ToolDefinition:
    """Create the list_all_exports tool."""

    def handler(params: ListExportsParams) -> dict[str, object]:
        package = None if params.package == "both" else params.package
        listing = list_exports(store, package, params.type)
        return {
            "package": params.package,
            "type": params.type,
            "totals": {group: len(records) for group, records in listing.items()},
            "exports": {
                group: [export_to_dict(store, record) for record in records]
                for group, records in listing.items()
            },
        }

    return ToolDefinition(
        name="list_all_exports",
        description=(
            "List exported APIs organized by type.\n\n"
            "Args:\n"
            "  - package (required string): 'core', 'ui-kit', or 'both'\n"
            "  - type (optional string): 'all' (default), 'functions', 'classes', "
            "'types', 'interfaces', or 'constants'\n\n"
            'Use when: "What functions are in @pushchain/core?"'
        ),
        parameters_model=ListExportsParams,
        handler=handler,
        annotations=read_only_annotations(open_world=False),
    )


def get_core_classes_tool(store: DataStore) -> ToolDefinition:
    """Create the get_core_classes tool."""

    def handler(_params: NoParameters) -> dict[str, object]:
        classes = core_classes(store)
        return {
            "total_classes": len(classes),
            "classes": [{**entry, "note": SEE_SOURCE_NOTE} for entry in classes],
            "note": "Use get_sdk_api(name: 'ClassName') for detailed info",
        }

    return ToolDefinition(
        name="get_core_classes",
        description=(
            "Get all classes exported from @pushchain/core with their methods.\n\n"
            "Args: None\n\n"
            'Use when: "What classes are in @pushchain/core?"'
        ),
        parameters_model=NoParameters,
        handler=handler,
        annotations=read_only_annotations(open_world=False),
    )


def get_ui_components_tool(store: DataStore) -> ToolDefinition:
    """Create the get_ui_components tool."""

    def handler(_params: NoParameters) -> dict[str, object]:
        grouped = ui_components(store)
        return {
            "summary": {
                "total_components": len(grouped["components"]),
                "total_hooks": len(grouped["hooks"]),
                "total_providers": len(grouped["providers"]),
            },
            **grouped,
            "note": SEE_SOURCE_NOTE,
        }

    return ToolDefinition(
        name="get_ui_components",
        description=(
            "Get all React components, hooks, and providers from @pushchain/ui-kit.\n\n"
            "Args: None\n\n"
            'Use when: "What components are in the UI kit?", "Show me all React hooks"'
        ),
        parameters_model=NoParameters,
        handler=handler,
        annotations=read_only_annotations(open_world=False),
    )
