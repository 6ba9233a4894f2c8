"""Tools for browsing and searching Push Chain documentation."""

from __future__ import annotations

from typing import Annotated, ClassVar, Literal

from pydantic import Field

from pushchain_mcp.errors import NotFoundError
from pushchain_mcp.formatting import format_pagination_text, paginate
from pushchain_mcp.tools import ToolDefinition, ToolParameters
from pushchain_mcp_server.constants import CONTENT_SEARCH_THRESHOLD
from pushchain_mcp_server.docs import (
    DocumentSource,
    category_for,
    collect_code_snippets,
    find_document,
    list_documents,
    search_documents,
)
from pushchain_mcp_server.tools.common import (
    DOC_PATH_MESSAGE,
    DOC_PATH_PATTERN,
    RESPONSE_FORMAT_DESCRIPTION,
    ResponseFormat,
    read_only_annotations,
)


class ListDocsParams(ToolParameters):
    """Parameters for list_push_chain_docs."""

    category: Literal["tutorials", "setup", "build", "ui-kit", "deep-dives", "all"] = (
        Field(
            "all",
            description=(
                "Filter by documentation category. Options: 'tutorials', 'setup', "
                "'build', 'ui-kit', 'deep-dives', 'all'"
            ),
        )
    )


class GetDocParams(ToolParameters):
    """Parameters for get_push_chain_doc."""

    constraint_messages: ClassVar[dict[str, str]] = {"path": DOC_PATH_MESSAGE}

    path: str = Field(
        ...,
        min_length=1,
        max_length=500,
        pattern=DOC_PATH_PATTERN,
        description=(
            "The path to the documentation file "
            "(e.g., 'docs/chain/01-Intro-Push-Chain.mdx')"
        ),
    )
    response_format: ResponseFormat = Field(
        "markdown", description=RESPONSE_FORMAT_DESCRIPTION
    )


class SearchDocsParams(ToolParameters):
    """Parameters for search_push_chain_docs."""

    query: str = Field(
        ...,
        min_length=2,
        max_length=200,
        description=(
            "Search query to match against file names, paths, and content "
            "(e.g., 'wallet setup', 'smart contract')"
        ),
    )
    limit: int = Field(
        20, ge=1, le=50, description="Maximum number of results to return"
    )
    response_format: ResponseFormat = Field(
        "markdown", description=RESPONSE_FORMAT_DESCRIPTION
    )


class CodeSnippetsParams(ToolParameters):
    """Parameters for get_code_snippets."""

    constraint_messages: ClassVar[dict[str, str]] = {
        "path": DOC_PATH_MESSAGE,
        "language": "Language must contain only alphanumeric characters",
    }

    path: Annotated[str, Field(max_length=500, pattern=DOC_PATH_PATTERN)] | None = (
        Field(
            None,
            description=(
                "Specific doc path to extract snippets from. "
                "If omitted, snippets are taken from all docs"
            ),
        )
    )
    language: Annotated[str, Field(max_length=50, pattern=r"^[A-Za-z0-9]+$")] | None = (
        Field(
            None,
            description=(
                "Filter by programming language "
                "(e.g., 'typescript', 'solidity', 'bash')"
            ),
        )
    )
    limit: int = Field(
        50, ge=1, le=100, description="Maximum number of code snippets to return"
    )


def list_push_chain_docs_tool(source: DocumentSource) -> ToolDefinition:
    """Create the list_push_chain_docs tool."""

    def handler(params: ListDocsParams) -> dict[str, object]:
        grouped = list_documents(source.documents(), params.category)
        total = sum(len(entries) for entries in grouped.values())
        return {
            "total": total,
            "category": params.category,
            "categories": {
                name: [document.summary() for document in entries]
                for name, entries in grouped.items()
            },
            "message": f"Found {total} documentation files",
        }

    return ToolDefinition(
        name="list_push_chain_docs",
        description=(
            "List all available Push Chain documentation files with optional "
            "category filtering.\n\n"
            "Returns the catalog of .mdx documentation files organized by category.\n\n"
            "Args:\n"
            "  - category (optional string): 'tutorials', 'setup', 'build', "
            "'ui-kit', 'deep-dives', or 'all' (default)\n\n"
            'Use when: "Show me all documentation", "What tutorials exist?"'
        ),
        parameters_model=ListDocsParams,
        handler=handler,
        annotations=read_only_annotations(open_world=True),
    )


def get_push_chain_doc_tool(source: DocumentSource) -> ToolDefinition:
    """Create the get_push_chain_doc tool."""

    def handler(params: GetDocParams) -> str | dict[str, object]:
        document = find_document(source.documents(), params.path)
        if document is None:
            raise NotFoundError(
                f"Documentation file not found: {params.path}\n\n"
                "Use 'list_push_chain_docs' to see available files or "
                "'search_push_chain_docs' to find related pages.",
                details={"path": params.path},
            )
        if params.response_format == "json":
            return {
                "name": document.name,
                "path": document.path,
                "url": document.html_url,
                "category": category_for(document.path),
                "description": document.description,
                "metadata": dict(document.metadata),
                "content": document.raw_content,
                "code_snippets": [block.to_dict() for block in document.code_blocks],
            }
        return (
            f"# {document.name}\n\n"
            f"Path: {document.path}\n"
            f"URL: {document.html_url}\n\n"
            f"---\n\n{document.raw_content}"
        )

    return ToolDefinition(
        name="get_push_chain_doc",
        description=(
            "Get full content of a specific Push Chain documentation file.\n\n"
            "Args:\n"
            "  - path (required string): Documentation file path "
            "(e.g., 'docs/chain/01-Intro-Push-Chain.mdx')\n"
            "  - response_format (optional string): 'markdown' (default) or 'json'\n\n"
            'Use when: "Show me the intro guide", "Get wallet setup documentation"'
        ),
        parameters_model=GetDocParams,
        handler=handler,
        annotations=read_only_annotations(open_world=True),
    )


def search_push_chain_docs_tool(
    source: DocumentSource, threshold: int = CONTENT_SEARCH_THRESHOLD
) -> ToolDefinition:
    """Create the search_push_chain_docs tool."""

    def handler(params: SearchDocsParams) -> str | dict[str, object]:
        hits = search_documents(source.documents(), params.query, threshold)
        if not hits:
            raise NotFoundError(
                f"No documentation found matching '{params.query}'.\n\n"
                "Try broader keywords, or use 'list_push_chain_docs' to browse "
                "by category.",
                details={"query": params.query},
            )
        page = paginate(hits, params.limit)
        if params.response_format == "json":
            return {
                "query": params.query,
                "total": page.total,
                "showing": page.showing,
                "results": [hit.to_dict() for hit in page.items],
                "pagination": page.metadata(),
            }

        lines = [
            f"# Search Results: '{params.query}'",
            "",
            f"Found {page.total} matches",
            "",
        ]
        filename_hits = [hit for hit in page.items if hit.match_type == "filename"]
        content_hits = [hit for hit in page.items if hit.match_type == "content"]
        if filename_hits:
            lines += ["## Filename Matches", ""]
            for hit in filename_hits:
                lines += [
                    f"- **{hit.document.name}** ({hit.document.path})",
                    f"  URL: {hit.document.html_url}",
                    "",
                ]
        if content_hits:
            lines += ["## Content Matches", ""]
            for hit in content_hits:
                lines.append(f"- **{hit.document.name}** ({hit.document.path})")
                if hit.preview:
                    lines.append(f"  Preview: ```\n{hit.preview}\n```")
                lines.append("")
        return "\n".join(lines) + format_pagination_text(page)

    return ToolDefinition(
        name="search_push_chain_docs",
        description=(
            "Search Push Chain documentation for specific topics or keywords.\n\n"
            "Searches filenames and paths first; page content is searched when "
            "few files match by name.\n\n"
            "Args:\n"
            "  - query (required string): Search query (e.g., 'wallet setup')\n"
            "  - limit (optional number): Max results, 1-50 (default: 20)\n"
            "  - response_format (optional string): 'markdown' (default) or 'json'\n\n"
            'Use when: "Find docs about wallets", "Search for transaction examples"'
        ),
        parameters_model=SearchDocsParams,
        handler=handler,
        annotations=read_only_annotations(open_world=True),
    )


def get_code_snippets_tool(source: DocumentSource) -> ToolDefinition:
    """Create the get_code_snippets tool."""

    def handler(params: CodeSnippetsParams) -> dict[str, object]:
        documents = source.documents()
        if params.path is not None and find_document(documents, params.path) is None:
            raise NotFoundError(
                f"Documentation file not found: {params.path}\n\n"
                "Use 'list_push_chain_docs' to see available files.",
                details={"path": params.path},
            )
        snippets = collect_code_snippets(documents, params.path, params.language)
        if not snippets:
            scope = f" in {params.path}" if params.path else ""
            language = f" for language '{params.language}'" if params.language else ""
            raise NotFoundError(
                f"No code snippets found{language}{scope}.\n\n"
                "Try another language, omit the filter, or use "
                "'search_push_chain_docs' to find pages with examples.",
                details={"path": params.path, "language": params.language},
            )
        page = paginate(snippets, params.limit)
        return {
            "total": page.total,
            "showing": page.showing,
            "language": params.language or "all",
            "snippets": page.items,
            "pagination": page.metadata(),
        }

    return ToolDefinition(
        name="get_code_snippets",
        description=(
            "Extract code snippets from Push Chain documentation.\n\n"
            "Args:\n"
            "  - path (optional string): Specific doc path to extract from\n"
            "  - language (optional string): Filter by language "
            "(e.g., 'typescript', 'solidity')\n"
            "  - limit (optional number): Max snippets, 1-100 (default: 50)\n\n"
            'Use when: "Show me TypeScript examples", "Get all Solidity code from docs"'
        ),
        parameters_model=CodeSnippetsParams,
        handler=handler,
        annotations=read_only_annotations(open_world=True),
    )
