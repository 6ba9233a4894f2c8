"""Runtime configuration for the Push Chain MCP server.

Settings are read once at startup from environment variables. ``main`` loads a
``.env`` file with python-dotenv before calling :meth:`ServerConfig.from_env`,
and command-line flags override the result.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pushchain_mcp.formatting import CHARACTER_LIMIT
from pushchain_mcp_server.constants import (
    CACHE_TTL_SECONDS,
    CONTENT_SEARCH_THRESHOLD,
    DOCS_CACHE,
)

DocsSource = Literal["cache", "github"]
DOCS_SOURCES: tuple[str, ...] = ("cache", "github")


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


@dataclass(slots=True)
class ServerConfig:
    data_dir: Path = Path("data")
    docs_cache_file: Path | None = None
    docs_source: DocsSource = "cache"
    character_limit: int = CHARACTER_LIMIT
    cache_ttl_seconds: int = CACHE_TTL_SECONDS
    content_search_threshold: int = CONTENT_SEARCH_THRESHOLD
    github_token: str | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.data_dir = Path(self.data_dir)
        if self.docs_source not in DOCS_SOURCES:
            raise ValueError(
                f"docs_source must be one of {', '.join(DOCS_SOURCES)}, "
                f"got {self.docs_source!r}"
            )

    def resolve_docs_cache(self) -> Path:
        if self.docs_cache_file is not None:
            return Path(self.docs_cache_file)
        return self.data_dir / DOCS_CACHE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """Build a configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ValueError: If a numeric or enumerated setting is malformed.

        Returns:
            Populated server configuration.
        """
        env = os.environ if environ is None else environ
        docs_cache = env.get("PUSHCHAIN_MCP_DOCS_CACHE")
        return cls(
            data_dir=Path(env.get("PUSHCHAIN_MCP_DATA_DIR", "data")),
            docs_cache_file=Path(docs_cache) if docs_cache else None,
            docs_source=env.get("PUSHCHAIN_MCP_DOCS_SOURCE", "cache").lower(),  # type: ignore[arg-type]
            character_limit=_int_setting(
                env, "PUSHCHAIN_MCP_CHARACTER_LIMIT", CHARACTER_LIMIT
            ),
            cache_ttl_seconds=_int_setting(
                env, "PUSHCHAIN_MCP_CACHE_TTL", CACHE_TTL_SECONDS
            ),
            content_search_threshold=_int_setting(
                env,
                "PUSHCHAIN_MCP_CONTENT_SEARCH_THRESHOLD",
                CONTENT_SEARCH_THRESHOLD,
            ),
            github_token=env.get("GITHUB_TOKEN") or None,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
