"""Unit tests for the tagged movie union."""

from __future__ import annotations

import pytest

from core.errors import RecordEncodeError, StructuralMismatchError, UnrecognizedDiscriminantError
from core.types import Genre, MovieV1, MovieV2
from records.versioned_movie import (
    CURRENT_VARIANT,
    MOVIE_VARIANTS,
    decode_legacy,
    decode_tagged,
    encode_current,
    encode_legacy,
    encode_versioned,
    upgrade_to_current,
    variant_for_record,
)

INCEPTION_URL = "https://www.imdb.com/title/tt1375666/"


def test_current_variant_is_last_appended() -> None:
    """The newest variant should always be the current one."""
    assert CURRENT_VARIANT is MOVIE_VARIANTS[-1]
    assert CURRENT_VARIANT.shape.record_type is MovieV2
    assert [variant.discriminant for variant in MOVIE_VARIANTS] == [0, 1]


def test_encode_current_prefixes_discriminant() -> None:
    """Current encoding should be tag byte followed by the V2 payload."""
    movie = MovieV2(title="Inception", genre=Genre.SCIENCE_FICTION, imdb_url=INCEPTION_URL)

    encoded = encode_current(movie)

    assert encoded[0] == 1
    assert encoded[1:14].hex() == "09000000496e63657074696f6e"
    assert encoded[14] == Genre.SCIENCE_FICTION


def test_encode_current_is_deterministic() -> None:
    """Equal values should always encode to identical bytes."""
    first = MovieV2(title="Amélie", genre=Genre.ROMANCE, imdb_url="")
    second = MovieV2(title="Amélie", genre=Genre.ROMANCE, imdb_url="")

    assert encode_current(first) == encode_current(second)


def test_encode_current_rejects_superseded_variant() -> None:
    """Fresh writes must use the current variant."""
    with pytest.raises(RecordEncodeError, match="upgrade_to_current"):
        encode_current(MovieV1(title="Heat", genre=Genre.DRAMA))  # type: ignore[arg-type]


def test_encode_versioned_tags_older_variant() -> None:
    """Older variants should keep their own discriminant."""
    encoded = encode_versioned(MovieV1(title="Inception", genre=Genre.SCIENCE_FICTION))

    assert encoded.hex() == "0009000000496e63657074696f6e05"


def test_encode_versioned_rejects_unknown_type() -> None:
    """Values outside the union cannot be encoded."""
    with pytest.raises(RecordEncodeError):
        encode_versioned("Inception")  # type: ignore[arg-type]


def test_decode_tagged_dispatches_on_discriminant() -> None:
    """Each tag should decode with its own variant's layout."""
    v1_movie = MovieV1(title="Alien", genre=Genre.HORROR)
    v2_movie = MovieV2(title="Alien", genre=Genre.HORROR, imdb_url="https://imdb.example/alien")

    assert decode_tagged(encode_versioned(v1_movie)) == v1_movie
    assert decode_tagged(encode_versioned(v2_movie)) == v2_movie


def test_decode_tagged_rejects_unknown_discriminant() -> None:
    """Unknown tags should raise a structural mismatch subtype."""
    data = b"\x07" + encode_legacy(MovieV1(title="Alien", genre=Genre.HORROR))

    with pytest.raises(UnrecognizedDiscriminantError) as error_info:
        decode_tagged(data)

    assert isinstance(error_info.value, StructuralMismatchError)


def test_decode_legacy_reads_untagged_bytes() -> None:
    """Legacy decoding should read the pre-union layout with no tag."""
    movie = MovieV1(title="Back To The Future", genre=Genre.SCIENCE_FICTION)

    assert decode_legacy(encode_legacy(movie)) == movie


def test_variant_for_record_rejects_foreign_type() -> None:
    """Dispatch should fail loudly for values outside the union."""
    with pytest.raises(TypeError):
        variant_for_record(object())  # type: ignore[arg-type]


def test_upgrade_to_current_fills_missing_field() -> None:
    """Older values should convert into the current variant for new writes."""
    legacy_movie = MovieV1(title="Heat", genre=Genre.DRAMA)

    upgraded = upgrade_to_current(legacy_movie, imdb_url="https://imdb.example/heat")

    assert upgraded == MovieV2(title="Heat", genre=Genre.DRAMA, imdb_url="https://imdb.example/heat")
    assert upgrade_to_current(upgraded) is upgraded
