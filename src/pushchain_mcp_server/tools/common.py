"""Shared helpers for MCP tools."""

from __future__ import annotations

from typing import Literal

from pushchain_mcp.tools import ToolParameters

ResponseFormat = Literal["markdown", "json"]
SdkPackage = Literal["core", "ui-kit"]

DOC_PATH_PATTERN = r"^docs/chain/.*\.mdx$"
DOC_PATH_MESSAGE = "Path must be a valid .mdx file in docs/chain/ directory"
SOURCE_PATH_PATTERN = r"^packages/(core|ui-kit)/"
SOURCE_PATH_MESSAGE = "Path must start with 'packages/core/' or 'packages/ui-kit/'"

SOURCE_LANGUAGES = {
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "jsx",
    ".json": "json",
}

SEE_SOURCE_NOTE = "Use get_sdk_api or get_source_file for more details"
RESPONSE_FORMAT_DESCRIPTION = (
    "Output format: 'markdown' for human-readable text or 'json' for structured data"
)


def read_only_annotations(*, open_world: bool) -> dict[str, bool]:
    """Behaviour hints shared by every tool; all tools only read data."""
    return {
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": open_world,
    }


def source_language(path: str) -> str:
    """Return the fence language for a source file path."""
    for suffix, language in SOURCE_LANGUAGES.items():
        if path.endswith(suffix):
            return language
    return ""


class NoParameters(ToolParameters):
    """Parameter schema for tools that take no arguments."""
