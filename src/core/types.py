"""Shared typed models.

This module defines the immutable movie record variants and the closed
union that wraps them. Variant layouts never change once released; a new
layout is always added as a new variant appended after the existing ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal, Union


class Genre(IntEnum):
    """Movie category, encoded as its one-byte declaration index."""

    COMEDY = 0
    DRAMA = 1
    FANTASY = 2
    HORROR = 3
    ROMANCE = 4
    SCIENCE_FICTION = 5


@dataclass(frozen=True)
class MovieV1:
    """First movie layout, also written untagged before versioning existed.

    Attributes:
        title: Movie title.
        genre: Movie category.
    """

    title: str
    genre: Genre


@dataclass(frozen=True)
class MovieV2:
    """Current movie layout.

    Attributes:
        title: Movie title.
        genre: Movie category.
        imdb_url: Link to the movie's IMDb page.
    """

    title: str
    genre: Genre
    imdb_url: str


VersionedMovie = Union[MovieV1, MovieV2]
Movie = MovieV2

SourceFormat = Literal["tagged", "legacy"]


@dataclass(frozen=True)
class DecodedRecord:
    """Decoded movie plus the byte layout that recognized it.

    Attributes:
        record: Decoded variant value.
        source_format: "tagged" for union bytes, "legacy" for pre-union bytes.
    """

    record: VersionedMovie
    source_format: SourceFormat
