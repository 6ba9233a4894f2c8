"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from sample_data import DOCS_CACHE, SDK_EXPORTS, SDK_PACKAGES, SDK_SOURCES, write_json

from pushchain_mcp.server import MCPServer
from pushchain_mcp_server.runtime import Runtime, create_runtime
from pushchain_mcp_server.store import DataStore, load_documents, load_sdk_store


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    """Provide a data directory holding every artifact the server reads."""
    directory = tmp_path / "data"
    directory.mkdir()
    write_json(directory / "sdk_file_contents.json", SDK_SOURCES)
    write_json(directory / "sdk_complete_exports.json", SDK_EXPORTS)
    write_json(directory / "sdk_packages_complete.json", SDK_PACKAGES)
    write_json(directory / "docs_cache.json", DOCS_CACHE)
    return directory


@pytest.fixture()
def store(data_dir: Path) -> DataStore:
    """Load the sample artifacts into a data store."""
    documents, generated_at = load_documents(data_dir / "docs_cache.json")
    return load_sdk_store(data_dir, documents, generated_at)


@pytest.fixture()
def runtime(store: DataStore) -> Runtime:
    """Provide a runtime with every tool registered over the sample store."""
    return create_runtime(store)


@pytest.fixture()
def server(runtime: Runtime) -> MCPServer:
    return runtime.server


@pytest.fixture()
def anyio_backend() -> str:
    """Run async tests on asyncio, the event loop fastmcp's client requires."""
    return "asyncio"
