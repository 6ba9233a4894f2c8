"""Read-only data store populated from static JSON artifacts.

The SDK artifacts are required: if any of them is missing or malformed,
:func:`load_sdk_store` raises :class:`DataIntegrityError` and the server refuses
to start. The documentation cache is best-effort and degrades to an empty list.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pushchain_mcp.errors import DataIntegrityError
from pushchain_mcp_server.constants import (
    EXPORT_KINDS,
    KIND_GROUPS,
    SDK_EXPORTS,
    SDK_FILE_CONTENTS,
    SDK_PACKAGES,
    SDK_PACKAGES_FILE,
)
from pushchain_mcp_server.mdx import parse_document
from pushchain_mcp_server.models import (
    CodeBlock,
    DocumentEntry,
    ExportRecord,
    PackageDescriptor,
    SourceFile,
)

logger = logging.getLogger(__name__)


def package_short_name(path: str) -> str | None:
    """Return the short package name whose root contains ``path``."""
    for short_name in SDK_PACKAGES:
        if f"packages/{short_name}/" in path:
            return short_name
    return None


def export_statistics(exports: Iterable[ExportRecord]) -> dict[str, int]:
    counts = {KIND_GROUPS[kind]: 0 for kind in EXPORT_KINDS}
    for record in exports:
        counts[KIND_GROUPS[record.kind]] += 1
    return {"total_exports": sum(counts.values()), **counts}


@dataclass(frozen=True)
class DataStore:
    """In-memory snapshot of SDK sources, exports, packages and documents.

    Attributes:
        sources: Source files keyed by path, in artifact order.
        exports: Export records grouped by kind, in artifact order.
        packages: Package descriptors keyed by short name.
        documents: Documentation entries from the local cache.
        docs_generated_at: Timestamp recorded in the documentation cache.
    """

    sources: dict[str, SourceFile] = field(default_factory=dict)
    exports: tuple[ExportRecord, ...] = ()
    packages: dict[str, PackageDescriptor] = field(default_factory=dict)
    documents: tuple[DocumentEntry, ...] = ()
    docs_generated_at: str | None = None

    def source_text(self, path: str) -> str:
        source = self.sources.get(path)
        return source.text if source is not None else ""

    def package_name_for(self, path: str) -> str | None:
        short_name = package_short_name(path)
        return SDK_PACKAGES[short_name] if short_name else None

    def exports_in(
        self, short_name: str | None = None, kinds: Sequence[str] | None = None
    ) -> list[ExportRecord]:
        """Filter exports by package short name and kind, keeping order."""
        return [
            record
            for record in self.exports
            if (short_name is None or package_short_name(record.source_file) == short_name)
            and (kinds is None or record.kind in kinds)
        ]

    def stats(self) -> dict[str, int]:
        return {
            "documents": len(self.documents),
            "source_files": len(self.sources),
            **export_statistics(self.exports),
        }


def _read_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError:
        raise DataIntegrityError(
            f"Required data file is missing: {path}",
            details={"path": str(path)},
        ) from None
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DataIntegrityError(
            f"Data file is unreadable or corrupt: {path} ({exc})",
            details={"path": str(path)},
        ) from exc


def _parse_sources(raw: Any, path: Path) -> dict[str, SourceFile]:
    if not isinstance(raw, Mapping):
        raise DataIntegrityError(f"Expected an object of file contents in {path}")
    sources: dict[str, SourceFile] = {}
    for file_path, text in raw.items():
        if not isinstance(text, str):
            raise DataIntegrityError(
                f"File contents for {file_path!r} in {path} must be a string"
            )
        if package_short_name(file_path):
            sources[file_path] = SourceFile(path=file_path, text=text)
    return sources


def _parse_exports(raw: Any, path: Path) -> tuple[ExportRecord, ...]:
    if not isinstance(raw, Mapping):
        raise DataIntegrityError(f"Expected an object of export groups in {path}")
    records: list[ExportRecord] = []
    for kind in EXPORT_KINDS:
        group = KIND_GROUPS[kind]
        entries = raw.get(group, [] if kind == "constant" else None)
        if not isinstance(entries, list):
            raise DataIntegrityError(f"Export group {group!r} is missing from {path}")
        for entry in entries:
            if not isinstance(entry, Mapping) or not {"name", "file"} <= entry.keys():
                raise DataIntegrityError(
                    f"Malformed {group} entry in {path}: {entry!r}"
                )
            if package_short_name(entry["file"]):
                records.append(
                    ExportRecord(
                        name=str(entry["name"]),
                        kind=kind,
                        source_file=str(entry["file"]),
                    )
                )
    return tuple(records)


def _parse_packages(
    raw: Any, path: Path, exports: Sequence[ExportRecord]
) -> dict[str, PackageDescriptor]:
    entries = raw.get("packages") if isinstance(raw, Mapping) else None
    if not isinstance(entries, list):
        raise DataIntegrityError(f"Expected a 'packages' list in {path}")
    by_name = {name: short for short, name in SDK_PACKAGES.items()}
    packages: dict[str, PackageDescriptor] = {}
    for entry in entries:
        if not isinstance(entry, Mapping) or entry.get("name") not in by_name:
            continue
        short_name = by_name[entry["name"]]
        packages[short_name] = PackageDescriptor(
            name=entry["name"],
            short_name=short_name,
            version=str(entry.get("version", "")),
            description=str(entry.get("description", "")),
            dependencies=dict(entry.get("dependencies") or {}),
            statistics=export_statistics(
                record
                for record in exports
                if package_short_name(record.source_file) == short_name
            ),
        )
    return packages


def load_sdk_store(
    data_dir: Path, documents: Sequence[DocumentEntry] = (), docs_generated_at: str | None = None
) -> DataStore:
    """Load the SDK artifacts from ``data_dir``.

    Raises:
        DataIntegrityError: If a required artifact is missing or malformed.
    """
    data_dir = Path(data_dir)
    contents_path = data_dir / SDK_FILE_CONTENTS
    exports_path = data_dir / SDK_EXPORTS
    packages_path = data_dir / SDK_PACKAGES_FILE

    sources = _parse_sources(_read_json(contents_path), contents_path)
    exports = _parse_exports(_read_json(exports_path), exports_path)
    packages = _parse_packages(_read_json(packages_path), packages_path, exports)

    missing = [record for record in exports if record.source_file not in sources]
    if missing:
        logger.warning(
            "%d exports reference source files absent from %s",
            len(missing),
            SDK_FILE_CONTENTS,
        )
    return DataStore(
        sources=sources,
        exports=exports,
        packages=packages,
        documents=tuple(documents),
        docs_generated_at=docs_generated_at,
    )


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


def document_from_record(record: Mapping[str, Any]) -> DocumentEntry:
    """Rebuild a :class:`DocumentEntry` from a cache record.

    Snake-case and camel-case keys are both accepted. Metadata, description
    and code snippets are re-parsed from the content when absent.
    """
    path = record["path"]
    content = record.get("content") or ""
    parsed = parse_document(
        content,
        path,
        name=record.get("name"),
        download_url=_first(record, "download_url", "downloadUrl"),
        html_url=_first(record, "html_url", "htmlUrl"),
        sha=record.get("sha"),
    )
    snippets = _first(record, "code_snippets", "codeSnippets")
    code_blocks = parsed.code_blocks
    if isinstance(snippets, list):
        code_blocks = tuple(
            CodeBlock(language=item.get("language") or "text", code=item.get("code", ""))
            for item in snippets
        )
    metadata = record.get("metadata")
    return DocumentEntry(
        name=parsed.name,
        path=path,
        raw_content=content,
        metadata=dict(metadata) if isinstance(metadata, Mapping) else parsed.metadata,
        code_blocks=code_blocks,
        description=record.get("description") or parsed.description,
        download_url=parsed.download_url,
        html_url=parsed.html_url,
        sha=parsed.sha,
    )


def unique_documents(documents: Iterable[DocumentEntry]) -> list[DocumentEntry]:
    """Drop documents whose path was already seen, keeping the first."""
    seen: set[str] = set()
    unique: list[DocumentEntry] = []
    for document in documents:
        if document.path in seen:
            logger.warning("Ignoring duplicate documentation path %s", document.path)
            continue
        seen.add(document.path)
        unique.append(document)
    return unique


def load_documents(path: Path) -> tuple[list[DocumentEntry], str | None]:
    """Load the documentation cache, degrading to no documents on failure.

    Returns:
        The documents and the cache generation timestamp, if recorded.
    """
    try:
        raw = _read_json(Path(path))
        records = raw.get("docs", []) if isinstance(raw, Mapping) else None
        if not isinstance(records, list):
            raise DataIntegrityError(f"Expected a 'docs' list in {path}")
        documents = [document_from_record(record) for record in records]
    except DataIntegrityError as error:
        logger.warning("Serving zero documents: %s", error.message)
        return [], None
    except (KeyError, TypeError, AttributeError) as exc:
        logger.warning("Serving zero documents: malformed record in %s (%s)", path, exc)
        return [], None
    generated_at = _first(raw, "generated_at", "generatedAt")
    return unique_documents(documents), generated_at


def write_docs_cache(
    path: Path, documents: Sequence[DocumentEntry], source: Mapping[str, Any]
) -> None:
    """Write documents in the ``docs_cache.json`` layout."""
    payload = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "source": dict(source),
        "total_files": len(documents),
        "docs": [document.to_dict() for document in documents],
    }
    _write_json(Path(path), payload)


def write_sdk_artifacts(
    output_dir: Path,
    sources: Sequence[SourceFile],
    exports: Sequence[ExportRecord],
    packages: Sequence[Mapping[str, Any]],
) -> None:
    """Write the three SDK artifacts read by :func:`load_sdk_store`."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    grouped: dict[str, list[dict[str, str]]] = {
        KIND_GROUPS[kind]: [] for kind in EXPORT_KINDS
    }
    for record in exports:
        grouped[KIND_GROUPS[record.kind]].append(
            {"name": record.name, "file": record.source_file}
        )
    _write_json(
        output_dir / SDK_FILE_CONTENTS, {source.path: source.text for source in sources}
    )
    _write_json(output_dir / SDK_EXPORTS, grouped)
    _write_json(output_dir / SDK_PACKAGES_FILE, {"packages": list(packages)})


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=False)
        handle.write("\n")
