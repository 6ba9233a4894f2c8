"""Tests for pagination and the character ceiling."""

from __future__ import annotations

import pytest

from pushchain_mcp.formatting import (
    CHARACTER_LIMIT,
    enforce_character_limit,
    format_pagination_text,
    paginate,
    pagination_metadata,
    truncation_notice,
)


@pytest.mark.parametrize(
    ("total", "offset", "limit"),
    [(23, 0, 20), (23, 20, 20), (23, 40, 20), (0, 0, 5), (5, 0, 5), (6, 5, 1)],
)
def test_pagination_metadata_is_consistent(total: int, offset: int, limit: int) -> None:
    """has_more, showing and next_offset agree with the sliced page."""
    items = list(range(total))

    page = paginate(items, limit, offset)
    metadata = page.metadata()

    assert metadata["showing"] == len(page.items) == max(0, min(limit, total - offset))
    assert metadata["has_more"] is (offset + limit < total)
    if metadata["has_more"]:
        assert metadata["next_offset"] == offset + limit
    else:
        assert "next_offset" not in metadata


def test_offset_past_the_end_yields_an_empty_page() -> None:
    page = paginate(["a", "b"], limit=10, offset=50)

    assert page.items == []
    assert page.total == 2
    assert page.has_more is False


def test_paginate_rejects_invalid_bounds() -> None:
    with pytest.raises(ValueError):
        paginate([1, 2, 3], limit=0)
    with pytest.raises(ValueError):
        paginate([1, 2, 3], limit=1, offset=-1)


def test_page_summary_mentions_omitted_items() -> None:
    page = paginate(list(range(30)), limit=10)

    assert page.summary("exports") == (
        "Showing 10 of 30 exports. Use pagination or filters to see more."
    )
    assert paginate([1], limit=10).summary() is None


def test_pagination_footer_points_at_the_next_offset() -> None:
    first = paginate(list(range(23)), limit=20)
    last = paginate(list(range(23)), limit=20, offset=20)

    assert format_pagination_text(first) == (
        "\n\n---\nShowing 20 of 23 results. Use offset=20 to see more."
    )
    assert format_pagination_text(last) == (
        "\n\n---\nShowing 3 of 23 results (offset 20)."
    )


def test_pagination_metadata_clamps_showing() -> None:
    assert pagination_metadata(3, 10, 5)["showing"] == 0


@pytest.mark.parametrize("length", [CHARACTER_LIMIT + 1, CHARACTER_LIMIT * 3])
def test_truncation_length_is_exact(length: int) -> None:
    """Truncated text is the ceiling plus the fixed notice."""
    text = "a" * length

    limited = enforce_character_limit(text)

    notice = truncation_notice(length, CHARACTER_LIMIT)
    assert limited.truncated is True
    assert limited.original_length == length
    assert len(limited.text) == CHARACTER_LIMIT + len(notice)
    assert f"Original length: {length} characters" in limited.text
    assert f"Showing: {CHARACTER_LIMIT} characters" in limited.text


def test_short_text_is_not_truncated() -> None:
    limited = enforce_character_limit("short", limit=10)

    assert limited.text == "short"
    assert limited.truncated is False
