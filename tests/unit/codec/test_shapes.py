"""Unit tests for record shape definitions."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from codec.shapes import GENRE_FIELD, STRING_FIELD, RecordShape, ensure_layout_distinct
from core.errors import LayoutConflictError
from core.types import Genre


@dataclass(frozen=True)
class _Review:
    author: str
    genre: Genre


def test_layout_signature_lists_field_types_in_order() -> None:
    """Layout signature should follow wire order."""
    shape = RecordShape(
        name="Review",
        record_type=_Review,
        fields=(("author", STRING_FIELD), ("genre", GENRE_FIELD)),
    )

    assert shape.layout_signature == ("string", "genre")
    assert shape.field_names == ("author", "genre")


def test_ensure_layout_distinct_rejects_same_field_types() -> None:
    """Shapes with identical field types should be rejected even if names differ."""
    first = RecordShape(
        name="ReviewA",
        record_type=_Review,
        fields=(("author", STRING_FIELD), ("genre", GENRE_FIELD)),
    )
    second = RecordShape(
        name="ReviewB",
        record_type=_Review,
        fields=(("title", STRING_FIELD), ("category", GENRE_FIELD)),
    )

    with pytest.raises(LayoutConflictError, match="ReviewA"):
        ensure_layout_distinct([first, second])


def test_ensure_layout_distinct_accepts_reordered_fields() -> None:
    """Reordering field types yields a distinct layout."""
    first = RecordShape(
        name="ReviewA",
        record_type=_Review,
        fields=(("author", STRING_FIELD), ("genre", GENRE_FIELD)),
    )
    second = RecordShape(
        name="ReviewB",
        record_type=_Review,
        fields=(("genre", GENRE_FIELD), ("author", STRING_FIELD)),
    )

    ensure_layout_distinct([first, second])
