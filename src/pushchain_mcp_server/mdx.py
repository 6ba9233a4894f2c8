"""Parsing helpers for ``.mdx`` documentation files."""

from __future__ import annotations

import re

from pushchain_mcp_server.models import CodeBlock, DocumentEntry

_FRONT_MATTER_LINE = re.compile(r"^(\w+):\s*(.+)$")
_SURROUNDING_QUOTES = re.compile(r"^[\"']|[\"']$")
_FENCE = "```"


def should_include_doc(filename: str) -> bool:
    """Return whether a file name denotes a published documentation page."""
    if filename.endswith(".mdx.deprecated"):
        return False
    if "CHANGELOG" in filename.upper():
        return False
    return filename.endswith(".mdx")


def parse_front_matter(lines: list[str]) -> tuple[dict[str, str], int]:
    """Read ``key: value`` pairs from a leading ``---`` delimited block.

    Returns:
        The metadata mapping and the index of the first line after the block.
    """
    metadata: dict[str, str] = {}
    if not lines or lines[0].strip() != "---":
        return metadata, 0
    for index, line in enumerate(lines[1:], start=1):
        if line.strip() == "---":
            return metadata, index + 1
        match = _FRONT_MATTER_LINE.match(line)
        if match:
            metadata[match.group(1)] = _SURROUNDING_QUOTES.sub("", match.group(2))
    return metadata, len(lines)


def first_paragraph(lines: list[str]) -> str:
    """Return the first line that is neither heading, rule nor import."""
    for line in lines:
        if (
            line.strip()
            and not line.startswith("#")
            and not line.startswith("---")
            and not line.startswith("import")
        ):
            return line.strip()
    return ""


def extract_code_blocks(lines: list[str]) -> tuple[CodeBlock, ...]:
    """Collect fenced code regions in document order.

    An unterminated fence at the end of the file is dropped.
    """
    blocks: list[CodeBlock] = []
    language: str | None = None
    body: list[str] = []
    for line in lines:
        if line.startswith(_FENCE):
            if language is None:
                language = line[len(_FENCE) :].strip() or "text"
                body = []
            else:
                blocks.append(CodeBlock(language=language, code="".join(body)))
                language = None
        elif language is not None:
            body.append(line + "\n")
    return tuple(blocks)


def parse_document(
    content: str,
    path: str,
    *,
    name: str | None = None,
    download_url: str | None = None,
    html_url: str | None = None,
    sha: str | None = None,
) -> DocumentEntry:
    """Build a :class:`DocumentEntry` from raw file text."""
    lines = content.split("\n")
    metadata, body_start = parse_front_matter(lines)
    description = first_paragraph(lines[body_start:]) or metadata.get("title") or path
    return DocumentEntry(
        name=name or path.rsplit("/", 1)[-1],
        path=path,
        raw_content=content,
        metadata=metadata,
        code_blocks=extract_code_blocks(lines),
        description=description,
        download_url=download_url,
        html_url=html_url,
        sha=sha,
    )
