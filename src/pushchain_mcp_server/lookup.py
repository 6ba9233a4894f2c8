"""Lookup and filter operations over the SDK portion of the data store.

Every function here is read-only and deterministic for a given store. Results
keep store insertion order; nothing is ranked. Empty results are returned as
empty collections and turned into not-found responses by the tool layer.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from pushchain_mcp_server.constants import (
    EXPORT_KINDS,
    KIND_GROUPS,
    PER_FILE_MATCH_CAP,
    SEARCH_CONTEXT_LINES,
    USAGE_CONTEXT_LINES,
)
from pushchain_mcp_server.extraction import (
    class_signature,
    component_signature,
    declaration_span,
    extract_class_methods,
    extract_definition,
)
from pushchain_mcp_server.models import ExportRecord, PackageDescriptor
from pushchain_mcp_server.store import DataStore

TOP_EXPORTS = 10

SEARCH_SCOPES: dict[str, tuple[bool, bool]] = {
    # scope -> (search export names, search files)
    "all": (True, True),
    "exports": (True, False),
    "types": (True, False),
    "code": (False, True),
}


def export_to_dict(store: DataStore, record: ExportRecord) -> dict[str, Any]:
    return {
        "name": record.name,
        "kind": record.kind,
        "package": store.package_name_for(record.source_file),
        "file": record.source_file,
    }


def find_exports(
    store: DataStore,
    name: str,
    package: str | None = None,
    kinds: Sequence[str] | None = None,
) -> list[ExportRecord]:
    """Return every export named exactly ``name``.

    Args:
        store: Data store to query.
        name: Exact, case-sensitive export name.
        package: Optional short package name filter.
        kinds: Optional export kinds to keep.
    """
    return [
        record
        for record in store.exports_in(package, kinds)
        if record.name == name
    ]


def describe_export(store: DataStore, record: ExportRecord) -> dict[str, Any]:
    """Pair an export with its package and an extracted definition."""
    definition = extract_definition(
        store.source_text(record.source_file), record.name, record.kind
    )
    return {
        **export_to_dict(store, record),
        "definition": definition.text,
        "extraction": definition.method,
        "note": (
            "Use get_source_file tool with the file path to see the complete "
            "source code"
        ),
    }


def describe_type(store: DataStore, record: ExportRecord) -> dict[str, Any]:
    """Return the full declaration of a type or interface export."""
    span = declaration_span(
        store.source_text(record.source_file), record.name, record.kind
    )
    return {
        **export_to_dict(store, record),
        "definition": span or f"// Definition found in {record.source_file}",
    }


@dataclass(frozen=True)
class LineMatch:
    """A matching line with its 1-based number and surrounding context."""

    line_number: int
    line: str
    context: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_number": self.line_number,
            "line": self.line,
            "context": self.context,
        }


@dataclass(frozen=True)
class FileMatches:
    path: str
    matches: tuple[LineMatch, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "matches": [m.to_dict() for m in self.matches]}


@dataclass(frozen=True)
class SdkSearchResults:
    """Parallel result lists produced by :func:`search_sdk`."""

    exports: list[ExportRecord] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    code_matches: list[FileMatches] = field(default_factory=list)

    def totals(self) -> dict[str, int]:
        return {
            "exports": len(self.exports),
            "files": len(self.files),
            "code_matches": len(self.code_matches),
        }

    @property
    def empty(self) -> bool:
        return not (self.exports or self.files or self.code_matches)


def _context(lines: list[str], index: int, radius: int) -> str:
    return "\n".join(lines[max(0, index - radius) : index + radius + 1])


def search_sdk(store: DataStore, query: str, scope: str = "all") -> SdkSearchResults:
    """Case-insensitive substring search over export names, paths and text.

    A file whose path matches is reported once as a path match and its
    content is not scanned. Content matches are capped per file.
    """
    search_exports, search_files = SEARCH_SCOPES[scope]
    needle = query.lower()
    results = SdkSearchResults()

    if search_exports:
        kinds = ("type", "interface") if scope == "types" else None
        results.exports.extend(
            record
            for record in store.exports_in(kinds=kinds)
            if needle in record.name.lower()
        )

    if search_files:
        for path, source in store.sources.items():
            if needle in path.lower():
                results.files.append(path)
                continue
            if needle not in source.text.lower():
                continue
            lines = source.text.split("\n")
            matches = [
                LineMatch(
                    line_number=index + 1,
                    line=line.strip(),
                    context=_context(lines, index, SEARCH_CONTEXT_LINES),
                )
                for index, line in enumerate(lines)
                if needle in line.lower()
            ]
            if matches:
                results.code_matches.append(
                    FileMatches(path=path, matches=tuple(matches[:PER_FILE_MATCH_CAP]))
                )
    return results


@dataclass(frozen=True)
class UsageExample:
    file: str
    line_number: int
    line: str
    context: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "line_number": self.line_number,
            "line": self.line,
            "context": self.context,
        }


def find_usage_examples(store: DataStore, api_name: str) -> list[UsageExample]:
    """Find case-sensitive mentions of ``api_name`` outside line comments."""
    examples: list[UsageExample] = []
    for path, source in store.sources.items():
        if api_name not in source.text:
            continue
        lines = source.text.split("\n")
        for index, line in enumerate(lines):
            if api_name in line and not line.strip().startswith("//"):
                examples.append(
                    UsageExample(
                        file=path,
                        line_number=index + 1,
                        line=line.strip(),
                        context=_context(lines, index, USAGE_CONTEXT_LINES),
                    )
                )
    return examples


def list_exports(
    store: DataStore, package: str | None = None, group: str = "all"
) -> dict[str, list[ExportRecord]]:
    """Group exports by plural kind name, optionally filtered."""
    listing: dict[str, list[ExportRecord]] = {}
    for kind in EXPORT_KINDS:
        name = KIND_GROUPS[kind]
        if group in ("all", name):
            listing[name] = store.exports_in(package, (kind,))
    return listing


def core_classes(store: DataStore) -> list[dict[str, Any]]:
    """Describe every class exported from the core package."""
    classes = []
    for record in store.exports_in("core", ("class",)):
        text = store.source_text(record.source_file)
        methods = extract_class_methods(text, record.name)
        classes.append(
            {
                "name": record.name,
                "file": record.source_file,
                "methods": methods,
                "method_count": len(methods),
                "signature": class_signature(text, record.name),
            }
        )
    return classes


def ui_components(store: DataStore) -> dict[str, list[dict[str, str]]]:
    """Split ui-kit function exports into components, hooks and providers."""
    grouped: dict[str, list[dict[str, str]]] = {
        "components": [],
        "hooks": [],
        "providers": [],
    }
    for record in store.exports_in("ui-kit", ("function",)):
        entry = {
            "name": record.name,
            "file": record.source_file,
            "signature": component_signature(
                store.source_text(record.source_file), record.name
            ),
        }
        if record.name.startswith("use"):
            grouped["hooks"].append(entry)
        elif "Provider" in record.name:
            grouped["providers"].append(entry)
        else:
            grouped["components"].append(entry)
    return grouped


def package_info(store: DataStore, short_name: str) -> dict[str, Any] | None:
    """Return package metadata, export statistics and leading export names."""
    descriptor: PackageDescriptor | None = store.packages.get(short_name)
    if descriptor is None:
        return None
    listing = list_exports(store, short_name)
    return {
        "name": descriptor.name,
        "version": descriptor.version,
        "description": descriptor.description,
        "dependencies": dict(descriptor.dependencies),
        "root": descriptor.root,
        "statistics": dict(descriptor.statistics),
        "top_exports": {
            group: [record.name for record in records[:TOP_EXPORTS]]
            for group, records in listing.items()
        },
    }
