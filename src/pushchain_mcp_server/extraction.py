"""Regex heuristics for reading exports and declarations out of SDK sources.

None of this is a TypeScript parser. Definitions are located by matching the
declaration header and reading forward line by line to the next top-level
statement or column-0 comment, with two fallbacks: a fixed window of lines
around the first export line naming the symbol, then a placeholder that still
tells the caller where to look.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pushchain_mcp_server.models import ExportRecord

EXPORT_PATTERNS: dict[str, re.Pattern[str]] = {
    "function": re.compile(r"export\s+(?:async\s+)?function\s+(\w+)"),
    "class": re.compile(r"export\s+(?:abstract\s+)?class\s+(\w+)"),
    "type": re.compile(r"export\s+type\s+(\w+)"),
    "interface": re.compile(r"export\s+interface\s+(\w+)"),
    "constant": re.compile(r"export\s+const\s+(\w+)"),
}

_HEADER_TEMPLATES: dict[str, str] = {
    "function": r"^export\s+(?:default\s+)?(?:async\s+)?function\s+{name}\b",
    "class": r"^export\s+(?:default\s+)?(?:abstract\s+)?class\s+{name}\b",
    "type": r"^export\s+(?:type|interface)\s+{name}\b",
    "interface": r"^export\s+(?:type|interface)\s+{name}\b",
    "constant": r"^export\s+const\s+{name}\b",
}

# kind -> (character cap, suffix appended when capped)
_DEFINITION_CAPS: dict[str, tuple[int, str]] = {
    "class": (5000, "\n  // ... (truncated for brevity)\n}"),
    "function": (3000, "\n  // ... (truncated)\n}"),
    "constant": (3000, "\n  // ... (truncated)\n}"),
}

_TOP_LEVEL_STATEMENT = re.compile(
    r"^(?:export|import|const|let|var|function|class|type|interface|declare)\b"
)
_COMMENT_STARTS = ("/**", "//")
_METHOD_PATTERN = re.compile(
    r"(?:async\s+)?(?:public\s+|private\s+|protected\s+)?(?:static\s+)?"
    r"(\w+)\s*\([^)]*\)\s*(?::\s*[^{;]+)?\s*\{"
)
_NOT_METHODS = frozenset(
    {"constructor", "if", "for", "while", "switch", "catch", "function", "return"}
)

WINDOW_LINES = 30
WINDOW_SUFFIX = "\n// ... (use get_source_file for complete code)"
PLACEHOLDER = (
    "// Definition extraction failed. Use get_source_file to view complete file."
)


@dataclass(frozen=True)
class Definition:
    """Extracted declaration text and the tier that produced it."""

    text: str
    method: str


def extract_exports(text: str, path: str) -> list[ExportRecord]:
    """Return every export declared in ``text``, grouped by kind."""
    records: list[ExportRecord] = []
    for kind, pattern in EXPORT_PATTERNS.items():
        records.extend(
            ExportRecord(name=match.group(1), kind=kind, source_file=path)
            for match in pattern.finditer(text)
        )
    return records


def _header_pattern(kind: str, name: str) -> re.Pattern[str]:
    template = _HEADER_TEMPLATES.get(kind, _HEADER_TEMPLATES["constant"])
    return re.compile(template.format(name=re.escape(name)), re.MULTILINE)


def _declaration_lines(lines: list[str], start: int) -> list[str]:
    first = lines[start]
    opened = first.count("{")
    if opened == first.count("}") and (opened or first.rstrip().endswith(";")):
        return [first]
    end = start + 1
    while end < len(lines):
        line = lines[end]
        if _TOP_LEVEL_STATEMENT.match(line) or line.startswith(_COMMENT_STARTS):
            break
        end += 1
        if line.startswith("}"):
            break
    span = lines[start:end]
    while len(span) > 1 and not span[-1].strip():
        span.pop()
    return span


def declaration_span(text: str, name: str, kind: str) -> str | None:
    """Return the full declaration of ``name`` or ``None`` if not located."""
    match = _header_pattern(kind, name).search(text)
    if match is None:
        return None
    lines = text.split("\n")
    start = text.count("\n", 0, match.start())
    return "\n".join(_declaration_lines(lines, start))


def extract_definition(text: str, name: str, kind: str) -> Definition:
    """Locate the declaration of an exported symbol.

    Args:
        text: Source file contents.
        name: Exported symbol name.
        kind: Export kind, selecting the header pattern and size cap.

    Returns:
        The declaration text and the extraction tier that produced it.
    """
    span = declaration_span(text, name, kind)
    if span:
        cap = _DEFINITION_CAPS.get(kind)
        if cap is not None and len(span) > cap[0]:
            span = span[: cap[0]] + cap[1]
        return Definition(text=span, method="declaration")

    lines = text.split("\n")
    for index, line in enumerate(lines):
        if "export" in line and name in line:
            window = "\n".join(lines[index : index + WINDOW_LINES])
            return Definition(text=window + WINDOW_SUFFIX, method="window")

    return Definition(text=PLACEHOLDER, method="placeholder")


def extract_class_methods(text: str, class_name: str) -> list[str]:
    """List method names declared in a class body, in source order."""
    body = declaration_span(text, class_name, "class") or text
    methods: list[str] = []
    for match in _METHOD_PATTERN.finditer(body):
        method = match.group(1)
        if method in _NOT_METHODS or method == class_name or method in methods:
            continue
        methods.append(method)
    return methods


def class_signature(text: str, class_name: str) -> str:
    """Return the class header plus up to 800 characters of its body."""
    pattern = re.compile(
        r"export\s+(?:abstract\s+)?class\s+"
        + re.escape(class_name)
        + r"\b[^{]*\{[\s\S]{0,800}"
    )
    match = pattern.search(text)
    return match.group(0) + "\n  // ... (truncated)\n}" if match else ""


def component_signature(text: str, component_name: str) -> str:
    """Return the first 500 characters after a component's export."""
    pattern = re.compile(
        r"export\s+(?:const\s+|(?:async\s+)?function\s+)?"
        + re.escape(component_name)
        + r"\b[\s\S]{0,500}"
    )
    match = pattern.search(text)
    return match.group(0) + "..." if match else ""
