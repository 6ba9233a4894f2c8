"""Model Context Protocol server for Push Chain documentation and SDK sources."""

from pushchain_mcp_server.config import ServerConfig
from pushchain_mcp_server.runtime import Runtime, build_runtime, create_runtime
from pushchain_mcp_server.store import DataStore, load_sdk_store

__all__ = [
    "DataStore",
    "Runtime",
    "ServerConfig",
    "build_runtime",
    "create_runtime",
    "load_sdk_store",
]
