"""Immutable records held by the Push Chain data store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code region taken from a documentation file."""

    language: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return {"language": self.language, "code": self.code}


@dataclass(frozen=True)
class DocumentEntry:
    """A parsed ``.mdx`` documentation file.

    Attributes:
        name: File name, e.g. ``01-Intro.mdx``.
        path: Repository path, unique across all documents.
        raw_content: Full text of the file.
        metadata: Key/value pairs from the leading front-matter block.
        code_blocks: Fenced code regions in document order.
        description: First prose line, falling back to the title or path.
        download_url: Raw download URL on the upstream host.
        html_url: Browsable URL on the upstream host.
        sha: Upstream blob hash.
    """

    name: str
    path: str
    raw_content: str
    metadata: dict[str, str] = field(default_factory=dict)
    code_blocks: tuple[CodeBlock, ...] = ()
    description: str = ""
    download_url: str | None = None
    html_url: str | None = None
    sha: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the ``docs_cache.json`` record layout."""
        return {
            "name": self.name,
            "path": self.path,
            "download_url": self.download_url,
            "html_url": self.html_url,
            "sha": self.sha,
            "content": self.raw_content,
            "metadata": dict(self.metadata),
            "description": self.description,
            "code_snippets": [block.to_dict() for block in self.code_blocks],
        }

    def summary(self) -> dict[str, Any]:
        """Return the listing view without the file content."""
        return {
            "name": self.name,
            "path": self.path,
            "description": self.description,
            "url": self.html_url,
        }


@dataclass(frozen=True)
class ExportRecord:
    """A symbol exported from an SDK source file."""

    name: str
    kind: str
    source_file: str


@dataclass(frozen=True)
class SourceFile:
    path: str
    text: str


@dataclass(frozen=True)
class PackageDescriptor:
    """Published metadata for one SDK package plus derived export counts."""

    name: str
    short_name: str
    version: str
    description: str
    dependencies: dict[str, str] = field(default_factory=dict)
    statistics: dict[str, int] = field(default_factory=dict)

    @property
    def root(self) -> str:
        return f"packages/{self.short_name}/"
