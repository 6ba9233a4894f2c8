"""Item-count pagination and character-ceiling truncation."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

CHARACTER_LIMIT = 25000

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """A bounded slice of a larger result list.

    Attributes:
        items: Items included in this page.
        total: Number of items available before slicing.
        offset: Index of the first included item.
        limit: Maximum number of items requested.
    """

    items: list[T]
    total: int
    offset: int
    limit: int

    @property
    def showing(self) -> int:
        return len(self.items)

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total

    @property
    def next_offset(self) -> int | None:
        return self.offset + self.limit if self.has_more else None

    def metadata(self) -> dict[str, Any]:
        """Return the pagination block attached to list responses."""
        return pagination_metadata(self.total, self.offset, self.limit)

    def summary(self, item_type: str = "items") -> str | None:
        """Describe omitted items, or ``None`` when nothing was omitted."""
        if self.showing >= self.total:
            return None
        return (
            f"Showing {self.showing} of {self.total} {item_type}. "
            "Use pagination or filters to see more."
        )


def paginate(items: Sequence[T], limit: int, offset: int = 0) -> Page[T]:
    """Return at most ``limit`` items starting at ``offset``.

    An offset past the end yields an empty page rather than an error.

    Raises:
        ValueError: If ``limit`` is below one or ``offset`` is negative.
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")
    if offset < 0:
        raise ValueError("offset cannot be negative")
    return Page(
        items=list(items[offset : offset + limit]),
        total=len(items),
        offset=offset,
        limit=limit,
    )


def pagination_metadata(total: int, offset: int, limit: int) -> dict[str, Any]:
    """Build the pagination metadata mapping for a result list."""
    has_more = offset + limit < total
    metadata: dict[str, Any] = {
        "total": total,
        "offset": offset,
        "limit": limit,
        "showing": max(0, min(limit, total - offset)),
        "has_more": has_more,
    }
    if has_more:
        metadata["next_offset"] = offset + limit
    return metadata


def format_pagination_text(page: Page[Any]) -> str:
    """Render a markdown footer describing the page position."""
    footer = f"\n\n---\nShowing {page.showing} of {page.total} results"
    if page.offset:
        footer += f" (offset {page.offset})"
    footer += "."
    if page.has_more:
        footer += f" Use offset={page.next_offset} to see more."
    return footer


@dataclass(frozen=True)
class LimitedText:
    """Text bounded by the character ceiling."""

    text: str
    truncated: bool
    original_length: int


def truncation_notice(original_length: int, shown_length: int) -> str:
    """Return the notice appended to hard-truncated responses."""
    return (
        "\n\n---\n**[Response Truncated]**\n"
        f"Original length: {original_length} characters\n"
        f"Showing: {shown_length} characters\n\n"
        "To see more results:\n"
        "- Use more specific search terms or filters\n"
        "- Use pagination parameters (limit, offset) to retrieve data in smaller chunks\n"
        "- Request specific sections or resources instead of full content"
    )


def enforce_character_limit(text: str, limit: int = CHARACTER_LIMIT) -> LimitedText:
    """Hard-cut ``text`` at ``limit`` characters and append a notice."""
    if len(text) <= limit:
        return LimitedText(text=text, truncated=False, original_length=len(text))
    return LimitedText(
        text=text[:limit] + truncation_notice(len(text), limit),
        truncated=True,
        original_length=len(text),
    )


def to_json_text(payload: Any) -> str:
    """Serialize a payload the way every JSON response is rendered."""
    return json.dumps(payload, indent=2, ensure_ascii=False)
