"""Tool registration helpers for the Push Chain MCP server."""

from __future__ import annotations

from pushchain_mcp.tools import ToolDefinition
from pushchain_mcp_server.constants import CONTENT_SEARCH_THRESHOLD
from pushchain_mcp_server.docs import DocumentSource
from pushchain_mcp_server.store import DataStore
from pushchain_mcp_server.tools.api import (
    get_sdk_api_tool,
    get_source_file_tool,
    get_type_definition_tool,
)
from pushchain_mcp_server.tools.catalog import (
    get_core_classes_tool,
    get_package_info_tool,
    get_ui_components_tool,
    list_all_exports_tool,
)
from pushchain_mcp_server.tools.docs import (
    get_code_snippets_tool,
    get_push_chain_doc_tool,
    list_push_chain_docs_tool,
    search_push_chain_docs_tool,
)
from pushchain_mcp_server.tools.search import find_usage_examples_tool, search_sdk_tool


def build_tools(
    store: DataStore,
    docs_source: DocumentSource,
    *,
    content_search_threshold: int = CONTENT_SEARCH_THRESHOLD,
) -> list[ToolDefinition]:
    """Instantiate all tool definitions over the provided data."""
    return [
        list_push_chain_docs_tool(docs_source),
        get_push_chain_doc_tool(docs_source),
        search_push_chain_docs_tool(docs_source, content_search_threshold),
        get_code_snippets_tool(docs_source),
        get_sdk_api_tool(store),
        search_sdk_tool(store),
        get_package_info_tool(store),
        get_type_definition_tool(store),
        get_source_file_tool(store),
        list_all_exports_tool(store),
        find_usage_examples_tool(store),
        get_core_classes_tool(store),
        get_ui_components_tool(store),
    ]
