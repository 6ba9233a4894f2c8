"""Startup wiring: load data, register tools, expose resources."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pushchain_mcp.server import MCPServer
from pushchain_mcp.tools import ToolDefinition
from pushchain_mcp_server.config import ServerConfig
from pushchain_mcp_server.docs import DocumentSource, StaticDocumentSource
from pushchain_mcp_server.github import GitHubDocsClient, GitHubDocumentSource
from pushchain_mcp_server.resources import ResourceCatalog
from pushchain_mcp_server.store import DataStore, load_documents, load_sdk_store
from pushchain_mcp_server.tools import build_tools

logger = logging.getLogger(__name__)


@dataclass
class Runtime:
    """Everything a transport needs to serve requests."""

    config: ServerConfig
    store: DataStore
    docs_source: DocumentSource
    server: MCPServer
    resources: ResourceCatalog
    tools: list[ToolDefinition] = field(default_factory=list)
    github_client: GitHubDocsClient | None = None

    def close(self) -> None:
        if self.github_client is not None:
            self.github_client.close()


def create_runtime(
    store: DataStore,
    docs_source: DocumentSource | None = None,
    config: ServerConfig | None = None,
) -> Runtime:
    """Register every tool over an already loaded store."""
    config = config or ServerConfig()
    docs_source = docs_source or StaticDocumentSource(store.documents)
    tools = build_tools(
        store, docs_source, content_search_threshold=config.content_search_threshold
    )
    server = MCPServer(character_limit=config.character_limit)
    server.register_tools(*tools)
    return Runtime(
        config=config,
        store=store,
        docs_source=docs_source,
        server=server,
        resources=ResourceCatalog(
            store, docs_source, character_limit=config.character_limit
        ),
        tools=tools,
    )


def build_runtime(config: ServerConfig) -> Runtime:
    """Load static data according to ``config`` and build the runtime.

    Raises:
        DataIntegrityError: If the SDK artifacts cannot be loaded.
    """
    documents, generated_at = [], None
    if config.docs_source == "cache":
        documents, generated_at = load_documents(config.resolve_docs_cache())
    store = load_sdk_store(config.data_dir, documents, generated_at)

    client: GitHubDocsClient | None = None
    docs_source: DocumentSource
    if config.docs_source == "github":
        client = GitHubDocsClient(config.github_token)
        docs_source = GitHubDocumentSource(client, ttl_seconds=config.cache_ttl_seconds)
    else:
        docs_source = StaticDocumentSource(store.documents)

    runtime = create_runtime(store, docs_source, config)
    runtime.github_client = client

    stats = store.stats()
    logger.info(
        "Loaded %d source files, %d exports (%d functions, %d classes, "
        "%d types, %d interfaces, %d constants)",
        stats["source_files"],
        stats["total_exports"],
        stats["functions"],
        stats["classes"],
        stats["types"],
        stats["interfaces"],
        stats["constants"],
    )
    if config.docs_source == "github":
        logger.info(
            "Documentation served from GitHub with a %ds cache",
            config.cache_ttl_seconds,
        )
    else:
        logger.info(
            "Loaded %d documentation files (generated at %s)",
            stats["documents"],
            generated_at or "unknown",
        )
    logger.info("Registered %d tools", len(runtime.tools))
    return runtime
