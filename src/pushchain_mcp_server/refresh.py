"""Regenerate the static data artifacts served by the MCP server.

Two subcommands are available::

    pushchain-mcp-refresh sdk --checkout ../push-chain-sdk --output data
    pushchain-mcp-refresh docs --output data/docs_cache.json [--from-dir DIR]

The server never runs this itself; artifacts are rebuilt out of process and
picked up on the next start.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from pushchain_mcp.errors import MCPError
from pushchain_mcp_server.config import ServerConfig
from pushchain_mcp_server.constants import SDK_PACKAGES
from pushchain_mcp_server.extraction import extract_exports
from pushchain_mcp_server.github import GitHubDocsClient
from pushchain_mcp_server.logging_config import configure_logging
from pushchain_mcp_server.mdx import parse_document, should_include_doc
from pushchain_mcp_server.models import DocumentEntry, ExportRecord, SourceFile
from pushchain_mcp_server.store import (
    unique_documents,
    write_docs_cache,
    write_sdk_artifacts,
)

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".ts", ".tsx", ".js", ".jsx")
_TEST_DIRECTORIES = frozenset({"test", "tests", "__tests__"})


def is_sdk_source(path: Path) -> bool:
    """Return whether ``path`` is a non-test SDK source file."""
    if path.suffix not in SOURCE_SUFFIXES:
        return False
    if ".test." in path.name or ".spec." in path.name:
        return False
    return not _TEST_DIRECTORIES.intersection(path.parts)


def iter_source_files(checkout: Path, short_name: str) -> Iterator[Path]:
    src = checkout / "packages" / short_name / "src"
    if not src.is_dir():
        logger.warning("No source directory for %s at %s", short_name, src)
        return
    for path in sorted(src.rglob("*")):
        if path.is_file() and is_sdk_source(path.relative_to(src)):
            yield path


def read_package_json(checkout: Path, short_name: str) -> dict[str, Any] | None:
    path = checkout / "packages" / short_name / "package.json"
    try:
        with path.open(encoding="utf-8") as handle:
            manifest = json.load(handle)
    except FileNotFoundError:
        logger.warning("package.json not found for %s", short_name)
        return None
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring unreadable %s: %s", path, exc)
        return None
    return {
        "name": manifest.get("name", SDK_PACKAGES[short_name]),
        "version": manifest.get("version", ""),
        "description": manifest.get("description", ""),
        "dependencies": manifest.get("dependencies", {}),
    }


def refresh_sdk(checkout: Path, output_dir: Path) -> dict[str, int]:
    """Scan a local SDK checkout and write the three SDK artifacts.

    Returns:
        Counts of source files, exports and packages written.
    """
    checkout = Path(checkout)
    sources: list[SourceFile] = []
    exports: list[ExportRecord] = []
    packages: list[dict[str, Any]] = []
    for short_name in SDK_PACKAGES:
        manifest = read_package_json(checkout, short_name)
        if manifest is not None:
            packages.append(manifest)
        for path in iter_source_files(checkout, short_name):
            relative = path.relative_to(checkout).as_posix()
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping %s: %s", relative, exc)
                continue
            sources.append(SourceFile(path=relative, text=text))
            exports.extend(extract_exports(text, relative))
        logger.info("Scanned package %s", short_name)

    write_sdk_artifacts(output_dir, sources, exports, packages)
    counts = {
        "source_files": len(sources),
        "exports": len(exports),
        "packages": len(packages),
    }
    logger.info(
        "Wrote %d source files, %d exports and %d packages to %s",
        counts["source_files"],
        counts["exports"],
        counts["packages"],
        output_dir,
    )
    return counts


def documents_from_directory(root: Path) -> list[DocumentEntry]:
    """Parse every publishable ``.mdx`` file below ``root``."""
    root = Path(root)
    documents = []
    for path in sorted(root.rglob("*")):
        if not path.is_file() or not should_include_doc(path.name):
            continue
        relative = path.relative_to(root).as_posix()
        documents.append(
            parse_document(path.read_text(encoding="utf-8"), relative, name=path.name)
        )
    return documents


def refresh_docs(
    output: Path,
    *,
    from_dir: Path | None = None,
    client: GitHubDocsClient | None = None,
) -> int:
    """Rebuild the documentation cache from a directory or from GitHub.

    Raises:
        UpstreamError: If GitHub cannot be reached.

    Returns:
        Number of documents written.
    """
    if from_dir is not None:
        documents = documents_from_directory(from_dir)
        source: dict[str, str] = {"directory": str(from_dir)}
    else:
        if client is None:
            raise ValueError("A GitHub client is required without --from-dir")
        documents = client.fetch_documents()
        source = client.source()
    documents = unique_documents(documents)
    write_docs_cache(output, documents, source)
    logger.info("Wrote %d documentation files to %s", len(documents), output)
    return len(documents)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Regenerate Push Chain MCP data artifacts."
    )
    parser.add_argument("--log-level", default=None, help="Logging level for stderr output.")
    subcommands = parser.add_subparsers(dest="command", required=True)

    sdk = subcommands.add_parser("sdk", help="Rebuild SDK artifacts from a checkout.")
    sdk.add_argument("--checkout", type=Path, required=True, help="SDK monorepo root.")
    sdk.add_argument("--output", type=Path, default=Path("data"), help="Output directory.")

    docs = subcommands.add_parser("docs", help="Rebuild the documentation cache.")
    docs.add_argument(
        "--output", type=Path, default=Path("data/docs_cache.json"), help="Output file."
    )
    docs.add_argument(
        "--from-dir", type=Path, default=None, help="Read .mdx files from a directory."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the refresh CLI."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    try:
        config = ServerConfig.from_env()
        configure_logging((args.log_level or config.log_level).upper())
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    if args.command == "sdk":
        refresh_sdk(args.checkout, args.output)
        return 0

    try:
        if args.from_dir is not None:
            refresh_docs(args.output, from_dir=args.from_dir)
        else:
            with GitHubDocsClient(config.github_token) as client:
                refresh_docs(args.output, client=client)
    except MCPError as error:
        logger.error("Documentation refresh failed: %s", error.message)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
