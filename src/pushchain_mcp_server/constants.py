"""Fixed values shared across the Push Chain MCP server."""

from __future__ import annotations

SERVER_NAME = "pushchain-mcp-server"

# Short package name -> npm package name.
SDK_PACKAGES: dict[str, str] = {
    "core": "@pushchain/core",
    "ui-kit": "@pushchain/ui-kit",
}

EXPORT_KINDS: tuple[str, ...] = ("function", "class", "type", "interface", "constant")

# Plural group names used by the exports artifact and list responses.
KIND_GROUPS: dict[str, str] = {
    "function": "functions",
    "class": "classes",
    "type": "types",
    "interface": "interfaces",
    "constant": "constants",
}

# Category name -> path marker, checked in this order.
DOC_CATEGORIES: dict[str, str] = {
    "tutorials": "/01-tutorials/",
    "setup": "/02-setup/",
    "build": "/03-build/",
    "ui-kit": "/04-ui-kit/",
    "deep-dives": "/05-deep-dives/",
}
OTHER_CATEGORY = "other"

CONTENT_SEARCH_THRESHOLD = 5
PER_FILE_MATCH_CAP = 5
SEARCH_CONTEXT_LINES = 2
USAGE_CONTEXT_LINES = 3
DOC_PREVIEW_LINES = 3

URI_SCHEME = "pushchain"
DOCS_MIME_TYPE = "text/markdown"
SDK_MIME_TYPE = "text/typescript"

SDK_FILE_CONTENTS = "sdk_file_contents.json"
SDK_EXPORTS = "sdk_complete_exports.json"
SDK_PACKAGES_FILE = "sdk_packages_complete.json"
DOCS_CACHE = "docs_cache.json"

GITHUB_API_BASE = "https://api.github.com"
GITHUB_OWNER = "pushchain"
GITHUB_REPO = "push-chain-website"
GITHUB_BRANCH = "1059-documentation-push-wallet"
GITHUB_DOCS_PATH = "docs/chain"
GITHUB_TIMEOUT_SECONDS = 30.0
USER_AGENT = "Push-Chain-MCP-Server"

CACHE_TTL_SECONDS = 30 * 60
