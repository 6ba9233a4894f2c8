"""Documentation sources and documentation lookups."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from pushchain_mcp_server.constants import (
    CONTENT_SEARCH_THRESHOLD,
    DOC_CATEGORIES,
    DOC_PREVIEW_LINES,
    OTHER_CATEGORY,
)
from pushchain_mcp_server.models import DocumentEntry


class DocumentSource(Protocol):
    """Anything that can supply the current documentation entries."""

    def documents(self) -> Sequence[DocumentEntry]: ...


class StaticDocumentSource:
    """Documentation loaded once from the local cache file."""

    def __init__(self, documents: Sequence[DocumentEntry]) -> None:
        self._documents = tuple(documents)

    def documents(self) -> Sequence[DocumentEntry]:
        return self._documents


def category_for(path: str) -> str:
    """Derive the documentation category from its path marker."""
    lowered = path.lower()
    for category, marker in DOC_CATEGORIES.items():
        if marker in lowered:
            return category
    return OTHER_CATEGORY


def list_documents(
    documents: Sequence[DocumentEntry], category: str = "all"
) -> dict[str, list[DocumentEntry]]:
    """Group documents by category, keeping only ``category`` unless ``all``."""
    grouped: dict[str, list[DocumentEntry]] = {
        name: [] for name in (*DOC_CATEGORIES, OTHER_CATEGORY)
    }
    for document in documents:
        document_category = category_for(document.path)
        if category in ("all", document_category):
            grouped[document_category].append(document)
    return grouped


def find_document(
    documents: Sequence[DocumentEntry], path: str
) -> DocumentEntry | None:
    for document in documents:
        if document.path == path:
            return document
    return None


@dataclass(frozen=True)
class DocSearchHit:
    """A documentation search hit.

    Attributes:
        document: Matching document.
        match_type: ``"filename"`` for name or path hits, ``"content"`` for
            body hits.
        preview: First matching body lines for content hits.
    """

    document: DocumentEntry
    match_type: str
    preview: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = {
            "name": self.document.name,
            "path": self.document.path,
            "url": self.document.html_url,
            "description": self.document.description,
            "match_type": self.match_type,
        }
        if self.preview is not None:
            payload["preview"] = self.preview
        return payload


def search_documents(
    documents: Sequence[DocumentEntry],
    query: str,
    threshold: int = CONTENT_SEARCH_THRESHOLD,
) -> list[DocSearchHit]:
    """Search names and paths, falling back to content for sparse results.

    Body text is only searched when fewer than ``threshold`` documents matched
    by name or path. Name and path hits always come first.
    """
    needle = query.lower()
    hits = [
        DocSearchHit(document=document, match_type="filename")
        for document in documents
        if needle in document.name.lower() or needle in document.path.lower()
    ]
    if len(hits) >= threshold:
        return hits

    matched = {hit.document.path for hit in hits}
    for document in documents:
        if document.path in matched or needle not in document.raw_content.lower():
            continue
        lines = [
            line for line in document.raw_content.split("\n") if needle in line.lower()
        ]
        hits.append(
            DocSearchHit(
                document=document,
                match_type="content",
                preview="\n".join(lines[:DOC_PREVIEW_LINES]),
            )
        )
    return hits


def collect_code_snippets(
    documents: Sequence[DocumentEntry],
    path: str | None = None,
    language: str | None = None,
) -> list[dict[str, str]]:
    """Collect code blocks, optionally from one document or one language."""
    wanted = language.lower() if language else None
    snippets: list[dict[str, str]] = []
    for document in documents:
        if path is not None and document.path != path:
            continue
        for block in document.code_blocks:
            if wanted is not None and block.language.lower() != wanted:
                continue
            snippets.append(
                {
                    "source": document.path,
                    "language": block.language,
                    "code": block.code.strip(),
                }
            )
    return snippets
