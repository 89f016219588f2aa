"""Tagged union of movie layouts.

Each variant is written as a one-byte discriminant (its index in the
variant table) followed by its payload. Variants are only ever appended,
and the untagged MovieV1 layout written before the union existed stays
readable through ``decode_legacy``.
"""

from __future__ import annotations

from dataclasses import dataclass

from codec.binary_codec import (
    decode_shape,
    encode_discriminant,
    encode_shape,
    read_length_prefix,
    split_discriminant,
)
from codec.shapes import GENRE_FIELD, STRING_FIELD, RecordShape, ensure_layout_distinct
from core.constants import (
    GENRE_BYTES,
    MOVIE_V1_DISCRIMINANT,
    MOVIE_V2_DISCRIMINANT,
    STRING_LENGTH_PREFIX_BYTES,
)
from core.errors import (
    RecordEncodeError,
    StructuralMismatchError,
    UnrecognizedDiscriminantError,
)
from core.types import Movie, MovieV1, MovieV2, VersionedMovie


@dataclass(frozen=True)
class MovieVariant:
    """One entry of the union's variant table."""

    discriminant: int
    label: str
    shape: RecordShape


MOVIE_V1_SHAPE = RecordShape(
    name="MovieV1",
    record_type=MovieV1,
    fields=(("title", STRING_FIELD), ("genre", GENRE_FIELD)),
)
MOVIE_V2_SHAPE = RecordShape(
    name="MovieV2",
    record_type=MovieV2,
    fields=(("title", STRING_FIELD), ("genre", GENRE_FIELD), ("imdb_url", STRING_FIELD)),
)
LEGACY_SHAPE = MOVIE_V1_SHAPE

MOVIE_VARIANTS: tuple[MovieVariant, ...] = (
    MovieVariant(discriminant=MOVIE_V1_DISCRIMINANT, label="v1", shape=MOVIE_V1_SHAPE),
    MovieVariant(discriminant=MOVIE_V2_DISCRIMINANT, label="v2", shape=MOVIE_V2_SHAPE),
)
CURRENT_VARIANT = MOVIE_VARIANTS[-1]

ensure_layout_distinct(variant.shape for variant in MOVIE_VARIANTS)


def variant_for_record(record: VersionedMovie) -> MovieVariant:
    """Return the variant table entry for a record value.

    Raises:
        TypeError: If the value is not a movie variant.
    """
    if isinstance(record, MovieV1):
        return MOVIE_VARIANTS[MOVIE_V1_DISCRIMINANT]
    if isinstance(record, MovieV2):
        return MOVIE_VARIANTS[MOVIE_V2_DISCRIMINANT]
    raise TypeError(f"Unsupported movie variant type: {type(record).__name__}")


def encode_current(record: Movie) -> bytes:
    """Encode a fresh record as the current variant.

    Args:
        record: Value built with the current variant's layout.

    Returns:
        Discriminant byte followed by the variant payload.

    Raises:
        RecordEncodeError: If the value is not the current variant.
    """
    if not isinstance(record, CURRENT_VARIANT.shape.record_type):
        raise RecordEncodeError(
            f"New writes must use {CURRENT_VARIANT.shape.name}, got {type(record).__name__}. "
            "Convert older values with upgrade_to_current before encoding."
        )
    return encode_versioned(record)


def encode_versioned(record: VersionedMovie) -> bytes:
    """Encode any known variant with its own discriminant.

    Used to reproduce bytes written while an older variant was current.
    """
    try:
        variant = variant_for_record(record)
    except TypeError as error:
        raise RecordEncodeError(str(error)) from error
    return encode_discriminant(variant.discriminant) + encode_shape(variant.shape, record)


def encode_legacy(record: MovieV1) -> bytes:
    """Encode a record in the untagged layout used before versioning."""
    return encode_shape(LEGACY_SHAPE, record)


def decode_tagged(data: bytes) -> VersionedMovie:
    """Decode bytes written through the tagged union.

    Args:
        data: Discriminant byte plus payload.

    Returns:
        The variant named by the discriminant.

    Raises:
        UnrecognizedDiscriminantError: If the tag names no known variant.
        StructuralMismatchError: If the payload does not match the variant's shape.
    """
    discriminant, payload = split_discriminant(data)
    if discriminant >= len(MOVIE_VARIANTS):
        raise UnrecognizedDiscriminantError(
            f"Unknown movie variant discriminant {discriminant}; "
            f"known discriminants are 0..{len(MOVIE_VARIANTS) - 1}."
        )
    variant = MOVIE_VARIANTS[discriminant]
    return decode_shape(variant.shape, payload)


def decode_legacy(data: bytes) -> MovieV1:
    """Decode untagged bytes written before the union was introduced."""
    return decode_shape(LEGACY_SHAPE, data)


def legacy_framing_matches(data: bytes) -> bool:
    """Return True when the leading title length spans every byte but the genre.

    This is the only framing the legacy layout accepts, so it is a cheap
    precondition for ``decode_legacy`` succeeding.
    """
    title_length = read_length_prefix(data)
    return title_length == len(data) - STRING_LENGTH_PREFIX_BYTES - GENRE_BYTES


def legacy_reading(data: bytes) -> MovieV1 | None:
    """Return the legacy interpretation of bytes, or None when it does not fit."""
    if not legacy_framing_matches(data):
        return None
    try:
        return decode_legacy(data)
    except StructuralMismatchError:
        return None


def legacy_misread_as_tagged(record: MovieV1) -> VersionedMovie | None:
    """Return the wrong value the tagged path would decode from legacy bytes.

    Legacy bytes open with the little-endian u32 title length, so its low
    byte lands where the union expects a discriminant. A misread needs that
    byte to name a known variant (title length 0 or 1 modulo 256) and the
    following three length bytes plus the first title byte to form a length
    that, together with the rest of the variant, consumes the input exactly.
    Below 16 MiB this requires a title starting with NUL.

    Args:
        record: Value as written by the pre-union encoder.

    Returns:
        The tagged misreading, or None when the legacy bytes are unambiguous.
    """
    data = encode_legacy(record)
    if data[0] >= len(MOVIE_VARIANTS):
        return None
    try:
        tagged_record = decode_tagged(data)
    except StructuralMismatchError:
        return None
    return None if tagged_record == record else tagged_record


def upgrade_to_current(record: VersionedMovie, imdb_url: str = "") -> Movie:
    """Convert a decoded older variant into a current-variant value.

    Stored bytes are left untouched; the result is only meant for new writes.

    Args:
        record: Any decoded movie variant.
        imdb_url: Value for the field MovieV1 lacks.

    Returns:
        Current-variant movie.
    """
    if isinstance(record, MovieV2):
        return record
    if isinstance(record, MovieV1):
        return MovieV2(title=record.title, genre=record.genre, imdb_url=imdb_url)
    raise TypeError(f"Unsupported movie variant type: {type(record).__name__}")
