"""Keyword search tools over SDK exports and sources."""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from pushchain_mcp.errors import NotFoundError
from pushchain_mcp.formatting import paginate, pagination_metadata
from pushchain_mcp.tools import ToolDefinition, ToolParameters
from pushchain_mcp_server.lookup import export_to_dict, find_usage_examples, search_sdk
from pushchain_mcp_server.store import DataStore
from pushchain_mcp_server.tools.common import read_only_annotations


class SearchSdkParams(ToolParameters):
    """Parameters for search_sdk."""

    query: str = Field(
        ...,
        min_length=2,
        max_length=200,
        description=(
            "Search query to match against export names, file paths, and code "
            "content (e.g., 'wallet', 'transaction')"
        ),
    )
    scope: Literal["all", "exports", "code", "types"] = Field(
        "all",
        description=(
            "Search scope: 'all', 'exports' for exported API names, 'code' for "
            "file paths and content, 'types' for type and interface names"
        ),
    )
    limit: int = Field(
        20,
        ge=1,
        le=100,
        strict=True,
        description="Maximum number of results to return per category",
    )
    offset: int = Field(
        0,
        ge=0,
        strict=True,
        description="Number of results to skip in each category",
    )


class UsageExamplesParams(ToolParameters):
    """Parameters for find_usage_examples."""

    api_name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="API name to find usage examples for (e.g., 'PushClient')",
    )
    limit: int = Field(
        20,
        ge=1,
        le=50,
        strict=True,
        description="Maximum number of usage examples to return",
    )
    offset: int = Field(
        0, ge=0, strict=True, description="Number of examples to skip"
    )


def search_sdk_tool(store: DataStore) -> ToolDefinition:
    """Create the search_sdk tool."""

    def handler(params: SearchSdkParams) -> dict[str, object]:
        results = search_sdk(store, params.query, params.scope)
        if results.empty:
            raise NotFoundError(
                f"No SDK matches for '{params.query}' in scope '{params.scope}'. "
                "Try a shorter query, scope 'all', or 'list_all_exports' to "
                "browse every export.",
                details={"query": params.query, "scope": params.scope},
            )
        exports = paginate(results.exports, params.limit, params.offset)
        files = paginate(results.files, params.limit, params.offset)
        code = paginate(results.code_matches, params.limit, params.offset)
        totals = results.totals()
        return {
            "query": params.query,
            "scope": params.scope,
            "results": {
                "exports": [export_to_dict(store, record) for record in exports.items],
                "files": [{"path": path, "reason": "path match"} for path in files.items],
                "code_matches": [match.to_dict() for match in code.items],
            },
            "total_found": totals,
            "pagination": pagination_metadata(
                max(totals.values()), params.offset, params.limit
            ),
        }

    return ToolDefinition(
        name="search_sdk",
        description=(
            "Search across SDK export names, file paths, and code content.\n\n"
            "Pagination applies to each result category independently.\n\n"
            "Args:\n"
            "  - query (required string): Search query (e.g., 'wallet')\n"
            "  - scope (optional string): 'all' (default), 'exports', 'code', "
            "or 'types'\n"
            "  - limit (optional number): Max results per category, 1-100 "
            "(default: 20)\n"
            "  - offset (optional number): Pagination offset (default: 0)\n\n"
            'Use when: "Find wallet-related APIs", "Search for transaction code"'
        ),
        parameters_model=SearchSdkParams,
        handler=handler,
        annotations=read_only_annotations(open_world=False),
    )


def find_usage_examples_tool(store: DataStore) -> ToolDefinition:
    """Create the find_usage_examples tool."""

    def handler(params: UsageExamplesParams) -> dict[str, object]:
        examples = find_usage_examples(store, params.api_name)
        if not examples:
            raise NotFoundError(
                f'No usage examples found for "{params.api_name}". '
                "Names are case-sensitive; check the exact name with "
                "'get_sdk_api' or 'search_sdk'.",
                details={"api_name": params.api_name},
            )
        page = paginate(examples, params.limit, params.offset)
        return {
            "api": params.api_name,
            "total_examples": page.total,
            "showing": page.showing,
            "examples": [example.to_dict() for example in page.items],
            "pagination": page.metadata(),
        }

    return ToolDefinition(
        name="find_usage_examples",
        description=(
            "Find real usage examples of an API across the SDK sources.\n\n"
            "Args:\n"
            "  - api_name (required string): API name (e.g., 'PushClient')\n"
            "  - limit (optional number): Max examples, 1-50 (default: 20)\n"
            "  - offset (optional number): Pagination offset (default: 0)\n\n"
            'Use when: "How is PushClient used?"'
        ),
        parameters_model=UsageExamplesParams,
        handler=handler,
        annotations=read_only_annotations(open_world=False),
    )
