"""Unit tests for the public SDK surface."""

from __future__ import annotations

import pytest

import moviecodec
from moviecodec import Genre, MovieV1, MovieV2


def test_public_surface_round_trips_current_movie() -> None:
    """SDK exports should cover the encode/decode path."""
    movie = MovieV2(title="Heat", genre=Genre.DRAMA, imdb_url="https://imdb.example/heat")

    encoded = moviecodec.encode_current(movie)

    assert moviecodec.decode_compatible(encoded) == movie
    assert len(moviecodec.record_digest(encoded)) == 64


def test_public_surface_upgrades_legacy_movie_for_new_writes() -> None:
    """Decoded legacy movies should be rewritten only through the current variant."""
    legacy_bytes = bytes.fromhex("120000004261636b20546f205468652046757475726505")
    legacy_movie = moviecodec.decode_compatible(legacy_bytes)

    with pytest.raises(moviecodec.RecordEncodeError):
        moviecodec.encode_current(legacy_movie)  # type: ignore[arg-type]

    upgraded = moviecodec.upgrade_to_current(legacy_movie)
    assert isinstance(legacy_movie, MovieV1)
    assert moviecodec.decode_compatible(moviecodec.encode_current(upgraded)) == upgraded


def test_public_errors_share_base_class() -> None:
    """Callers can catch every codec failure through one base class."""
    with pytest.raises(moviecodec.MovieCodecError):
        moviecodec.decode_compatible(b"\xff")
