"""End-to-end coverage for the documentation tools."""

from __future__ import annotations

from sample_data import INTRO_PATH, SETUP_PATHS, TUTORIAL_PATHS, call_json

from pushchain_mcp.server import MCPServer
from pushchain_mcp_server.docs import category_for, search_documents
from pushchain_mcp_server.store import DataStore


def test_category_filter_returns_only_setup(server: MCPServer) -> None:
    """Filtering by setup returns the three setup pages and no tutorials."""
    payload = call_json(server, "list_push_chain_docs", {"category": "setup"})

    setup = payload["categories"]["setup"]
    assert payload["total"] == 3
    assert [entry["path"] for entry in setup] == SETUP_PATHS
    assert payload["categories"]["tutorials"] == []


def test_listing_all_groups_every_document(server: MCPServer) -> None:
    payload = call_json(server, "list_push_chain_docs", {})

    assert payload["total"] == 9
    assert len(payload["categories"]["tutorials"]) == 5
    assert [entry["path"] for entry in payload["categories"]["other"]] == [INTRO_PATH]
    assert payload["message"] == "Found 9 documentation files"


def test_category_is_derived_from_path_markers() -> None:
    assert category_for(TUTORIAL_PATHS[0]) == "tutorials"
    assert category_for("docs/chain/04-UI-Kit/01-Intro.mdx") == "ui-kit"
    assert category_for(INTRO_PATH) == "other"


def test_get_doc_markdown(server: MCPServer) -> None:
    result = server.call_tool("get_push_chain_doc", {"path": INTRO_PATH})

    assert result.is_error is False
    assert result.text.startswith(f"# 01-Intro-Push-Chain.mdx\n\nPath: {INTRO_PATH}\n")
    assert "Push Chain is a shared state L1" in result.text


def test_get_doc_json(server: MCPServer) -> None:
    payload = call_json(
        server, "get_push_chain_doc", {"path": INTRO_PATH, "response_format": "json"}
    )

    assert payload["metadata"] == {"title": "Intro to Push Chain", "slug": "/intro"}
    assert payload["description"] == "Push Chain is a shared state L1 for universal apps."
    assert payload["code_snippets"][0]["language"] == "typescript"


def test_get_doc_unknown_path_is_not_found(server: MCPServer) -> None:
    result = server.call_tool(
        "get_push_chain_doc", {"path": "docs/chain/99-Missing.mdx"}
    )

    assert result.is_error is False
    assert result.not_found is True
    assert "list_push_chain_docs" in result.text


def test_search_prefers_filename_matches(server: MCPServer) -> None:
    payload = call_json(
        server,
        "search_push_chain_docs",
        {"query": "wallet", "response_format": "json"},
    )

    results = payload["results"]
    assert results[0]["path"] == SETUP_PATHS[0]
    assert results[0]["match_type"] == "filename"
    assert all(entry["match_type"] == "content" for entry in results[1:])


def test_search_markdown_includes_pagination_footer(server: MCPServer) -> None:
    result = server.call_tool("search_push_chain_docs", {"query": "tutorial", "limit": 2})

    assert result.text.startswith("# Search Results: 'tutorial'")
    assert "## Filename Matches" in result.text
    assert result.text.endswith("Showing 2 of 5 results. Use offset=2 to see more.")


def test_content_search_respects_threshold(store: DataStore) -> None:
    """Body text is only scanned when name matches are sparse."""
    sparse = search_documents(store.documents, "tutorial", threshold=6)
    plentiful = search_documents(store.documents, "tutorial", threshold=5)

    assert {hit.match_type for hit in plentiful} == {"filename"}
    assert len(sparse) == len(plentiful)
    assert [hit.document.path for hit in plentiful] == TUTORIAL_PATHS


def test_search_with_no_matches_is_not_found(server: MCPServer) -> None:
    result = server.call_tool("search_push_chain_docs", {"query": "zkrollup-nothing"})

    assert result.is_error is False
    assert result.not_found is True


def test_code_snippets_filter_by_language(server: MCPServer) -> None:
    payload = call_json(server, "get_code_snippets", {"language": "BASH"})

    assert payload["total"] == 1
    assert payload["snippets"] == [
        {
            "source": SETUP_PATHS[0],
            "language": "bash",
            "code": "npm install @pushchain/core",
        }
    ]


def test_code_snippets_for_one_document(server: MCPServer) -> None:
    payload = call_json(server, "get_code_snippets", {"path": SETUP_PATHS[0]})

    assert [snippet["language"] for snippet in payload["snippets"]] == [
        "typescript",
        "bash",
    ]
    assert payload["pagination"]["has_more"] is False


def test_code_snippets_without_matches_are_not_found(server: MCPServer) -> None:
    result = server.call_tool("get_code_snippets", {"language": "solidity"})

    assert result.is_error is False
    assert result.not_found is True
