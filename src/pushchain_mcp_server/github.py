"""Upstream access to the Push Chain documentation repository on GitHub.

The server normally answers from the local documentation cache. When started
with ``--docs-source github`` the documentation tools read through
:class:`GitHubDocumentSource`, which fetches the ``.mdx`` tree once per TTL
window. The refresh command uses the same client to rebuild the cache file.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import requests

from pushchain_mcp.errors import UpstreamError
from pushchain_mcp_server.constants import (
    CACHE_TTL_SECONDS,
    GITHUB_API_BASE,
    GITHUB_BRANCH,
    GITHUB_DOCS_PATH,
    GITHUB_OWNER,
    GITHUB_REPO,
    GITHUB_TIMEOUT_SECONDS,
    USER_AGENT,
)
from pushchain_mcp_server.mdx import parse_document, should_include_doc
from pushchain_mcp_server.models import DocumentEntry

logger = logging.getLogger(__name__)

V = TypeVar("V")


def upstream_error(exc: requests.RequestException) -> UpstreamError:
    """Map a requests failure to an actionable :class:`UpstreamError`."""
    if isinstance(exc, requests.Timeout):
        return UpstreamError(
            "Error: Request to GitHub timed out. GitHub may be experiencing "
            "issues. Please retry in a few moments.",
            cause="timeout",
            remedy="retry",
        )
    if isinstance(exc, requests.ConnectionError):
        return UpstreamError(
            "Error: Cannot reach GitHub API. Please check your network "
            "connection and try again.",
            cause="unreachable",
            remedy="check network connectivity and retry",
        )
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        status = exc.response.status_code
        if status in (403, 429):
            return UpstreamError(
                "Error: GitHub API rate limit exceeded. Responses are cached for "
                "30 minutes to minimize requests. Please wait approximately 1 hour "
                "for the rate limit to reset, or set GITHUB_TOKEN to raise the limit.",
                cause="rate_limited",
                remedy="wait for the limit to reset or configure GITHUB_TOKEN",
                status=status,
            )
        if status == 404:
            return UpstreamError(
                "Error: Documentation file not found on GitHub. Use the "
                "'list_push_chain_docs' tool to see all available documentation files.",
                cause="not_found",
                remedy="use list_push_chain_docs",
                status=status,
            )
        if status == 422:
            return UpstreamError(
                "Error: Invalid request to GitHub API. Please check that the file "
                "path is correctly formatted (e.g., 'docs/chain/filename.mdx').",
                cause="invalid_request",
                remedy="check the documentation path format",
                status=status,
            )
        if status >= 500:
            return UpstreamError(
                f"Error: GitHub is experiencing server issues (status {status}). "
                "Please try again in a few minutes.",
                cause="server_error",
                remedy="retry in a few minutes",
                status=status,
            )
        return UpstreamError(
            f"Error: GitHub API request failed with status {status}. "
            "Please try again later.",
            cause="http_error",
            remedy="retry later",
            status=status,
        )
    return UpstreamError(
        f"Error: An unexpected error occurred while contacting GitHub: {exc}",
        cause="transport_error",
        remedy="retry",
    )


def invalid_response(detail: str) -> UpstreamError:
    """Describe a GitHub reply that arrived but could not be understood."""
    return UpstreamError(
        "Error: GitHub returned a response that could not be read "
        f"({detail}). A proxy or captive portal may be intercepting requests. "
        "Please retry in a few moments.",
        cause="invalid_response",
        remedy="check network proxies and retry",
    )


def _authorization(token: str) -> str:
    # Fine-grained tokens require the Bearer scheme.
    scheme = "Bearer" if token.startswith("github_pat_") else "token"
    return f"{scheme} {token}"


class GitHubDocsClient:
    """Minimal client for the GitHub contents API."""

    def __init__(
        self,
        token: str | None = None,
        *,
        owner: str = GITHUB_OWNER,
        repo: str = GITHUB_REPO,
        branch: str = GITHUB_BRANCH,
        base_path: str = GITHUB_DOCS_PATH,
        api_base: str = GITHUB_API_BASE,
        timeout: float = GITHUB_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.base_path = base_path
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = USER_AGENT
        if token:
            self._session.headers["Authorization"] = _authorization(token)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "GitHubDocsClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def source(self) -> dict[str, str]:
        return {
            "owner": self.owner,
            "repo": self.repo,
            "branch": self.branch,
            "base_path": self.base_path,
        }

    def _get(self, url: str, **kwargs: Any) -> requests.Response:
        if url.startswith("/"):
            url = f"{self._api_base}{url}"
        try:
            response = self._session.get(url, timeout=self._timeout, **kwargs)
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.debug("GitHub request for %s failed: %s", url, exc)
            raise upstream_error(exc) from exc
        return response

    def list_contents(self, path: str) -> list[dict[str, Any]]:
        """Return the directory listing for ``path``."""
        response = self._get(
            f"/repos/{self.owner}/{self.repo}/contents/{path}",
            params={"ref": self.branch},
            headers={"Accept": "application/vnd.github+json"},
        )
        try:
            payload = response.json()
        except ValueError as exc:
            raise invalid_response("body is not JSON") from exc
        if not isinstance(payload, list):
            return []
        for item in payload:
            if not isinstance(item, dict) or "path" not in item:
                raise invalid_response(f"listing entry without a path under {path}")
        return payload

    def list_doc_files(self, path: str | None = None) -> list[dict[str, Any]]:
        """Recursively list publishable ``.mdx`` files under ``path``."""
        files: list[dict[str, Any]] = []
        for item in self.list_contents(path or self.base_path):
            if item.get("type") == "file" and should_include_doc(item.get("name", "")):
                if not item.get("download_url"):
                    raise invalid_response(f"no download URL for {item['path']}")
                files.append(item)
            elif item.get("type") == "dir":
                files.extend(self.list_doc_files(item["path"]))
        return files

    def fetch_text(self, download_url: str) -> str:
        response = self._get(
            download_url, headers={"Accept": "application/vnd.github.raw"}
        )
        return response.text

    def fetch_documents(self) -> list[DocumentEntry]:
        """Fetch and parse every documentation file."""
        files = self.list_doc_files()
        logger.info("Fetching %d documentation files from GitHub", len(files))
        return [
            parse_document(
                self.fetch_text(item["download_url"]),
                item["path"],
                name=item.get("name"),
                download_url=item.get("download_url"),
                html_url=item.get("html_url"),
                sha=item.get("sha"),
            )
            for item in files
        ]


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    fetched_at: float


class PullThroughCache(Generic[V]):
    """Keyed cache that fetches on miss or expiry.

    Fetch failures propagate to the caller and leave any previous entry in
    place for the next attempt to replace.
    """

    def __init__(
        self,
        fetch: Callable[[str], V],
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch = fetch
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry[V]] = {}

    def get(self, key: str) -> CacheEntry[V]:
        """Return a fresh entry for ``key``, fetching it if needed."""
        now = self._clock()
        entry = self._entries.get(key)
        if entry is not None and now - entry.fetched_at < self._ttl:
            return entry
        entry = CacheEntry(value=self._fetch(key), fetched_at=now)
        self._entries[key] = entry
        return entry

    def invalidate(self, key: str | None = None) -> None:
        """Drop one entry, or every entry when ``key`` is omitted."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)


class GitHubDocumentSource:
    """Documentation source that reads through a TTL cache from GitHub."""

    CACHE_KEY = "docs"

    def __init__(
        self,
        client: GitHubDocsClient,
        *,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self.cache: PullThroughCache[list[DocumentEntry]] = PullThroughCache(
            lambda _key: client.fetch_documents(), ttl_seconds, clock
        )

    def documents(self) -> list[DocumentEntry]:
        return self.cache.get(self.CACHE_KEY).value
