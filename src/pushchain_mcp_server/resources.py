"""Addressable resources for documentation pages and SDK source files.

URIs take two forms::

    pushchain://docs/<document path>
    pushchain://sdk/<core|ui-kit>/<source path>

Reading returns the whole record text. Resources are never paginated but the
character ceiling still applies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pushchain_mcp.errors import ArgumentValidationError, NotFoundError, UpstreamError
from pushchain_mcp.formatting import CHARACTER_LIMIT, enforce_character_limit
from pushchain_mcp_server.constants import (
    DOCS_MIME_TYPE,
    SDK_MIME_TYPE,
    SDK_PACKAGES,
    URI_SCHEME,
)
from pushchain_mcp_server.docs import DocumentSource, find_document
from pushchain_mcp_server.store import DataStore, package_short_name

logger = logging.getLogger(__name__)

DOCS_PREFIX = f"{URI_SCHEME}://docs/"
SDK_PREFIX = f"{URI_SCHEME}://sdk/"


@dataclass(frozen=True)
class ResourceDescriptor:
    uri: str
    name: str
    description: str
    mime_type: str


@dataclass(frozen=True)
class ResourceContent:
    uri: str
    mime_type: str
    text: str
    truncated: bool = False


def doc_uri(path: str) -> str:
    return f"{DOCS_PREFIX}{path}"


def sdk_uri(path: str) -> str:
    return f"{SDK_PREFIX}{package_short_name(path)}/{path}"


class ResourceCatalog:
    """Lists and reads resources backed by the data store."""

    def __init__(
        self,
        store: DataStore,
        docs_source: DocumentSource,
        *,
        character_limit: int = CHARACTER_LIMIT,
    ) -> None:
        self._store = store
        self._docs_source = docs_source
        self._character_limit = character_limit

    def list_resources(self) -> list[ResourceDescriptor]:
        """Return every documentation and SDK source resource.

        Documentation resources are omitted when the documentation source is
        unreachable.
        """
        resources: list[ResourceDescriptor] = []
        try:
            documents = self._docs_source.documents()
        except UpstreamError as error:
            logger.warning("Listing resources without documentation: %s", error.message)
            documents = []
        for document in documents:
            resources.append(
                ResourceDescriptor(
                    uri=doc_uri(document.path),
                    name=document.name,
                    description=f"Push Chain documentation: {document.path}",
                    mime_type=DOCS_MIME_TYPE,
                )
            )
        for path in self._store.sources:
            resources.append(
                ResourceDescriptor(
                    uri=sdk_uri(path),
                    name=path.rsplit("/", 1)[-1],
                    description=f"SDK source: {path}",
                    mime_type=SDK_MIME_TYPE,
                )
            )
        return resources

    def read_resource(self, uri: str) -> ResourceContent:
        """Return the full text behind ``uri``.

        Raises:
            ArgumentValidationError: If the URI does not use a known form.
            NotFoundError: If no record exists at the URI.
            UpstreamError: If the documentation source cannot be reached.
        """
        if uri.startswith(DOCS_PREFIX):
            path = uri[len(DOCS_PREFIX) :]
            document = find_document(self._docs_source.documents(), path)
            if document is None:
                raise NotFoundError(
                    f"Documentation not found: {path}. "
                    "Use 'list_push_chain_docs' to see available files.",
                    details={"uri": uri},
                )
            return self._content(uri, DOCS_MIME_TYPE, document.raw_content)

        if uri.startswith(SDK_PREFIX):
            short_name, _, path = uri[len(SDK_PREFIX) :].partition("/")
            if short_name not in SDK_PACKAGES or not path:
                raise ArgumentValidationError(
                    f"Invalid SDK resource URI: {uri}. Expected "
                    f"{SDK_PREFIX}<core|ui-kit>/<path>.",
                    details={"uri": uri},
                )
            source = self._store.sources.get(path)
            if source is None or package_short_name(path) != short_name:
                raise NotFoundError(
                    f"Resource not found: {path}. "
                    "Use 'search_sdk' with scope 'code' to locate files.",
                    details={"uri": uri},
                )
            return self._content(uri, SDK_MIME_TYPE, source.text)

        raise ArgumentValidationError(
            f"Invalid resource URI: {uri}. Expected {DOCS_PREFIX}<path> or "
            f"{SDK_PREFIX}<core|ui-kit>/<path>.",
            details={"uri": uri},
        )

    def _content(self, uri: str, mime_type: str, text: str) -> ResourceContent:
        limited = enforce_character_limit(text, self._character_limit)
        return ResourceContent(
            uri=uri, mime_type=mime_type, text=limited.text, truncated=limited.truncated
        )
