"""Strict encode/decode against a single record shape.

This module adapts construct to an exact-match contract: decoding succeeds
only when the input is consumed completely with no shortfall and no
leftover bytes. Codec failures surface as project errors.
"""

from __future__ import annotations

import hashlib
import io
from typing import Any

from construct import ConstructError, Int8ul, Int32ul

from codec.shapes import RecordShape
from core.constants import DISCRIMINANT_BYTES, HASH_ALGORITHM, STRING_LENGTH_PREFIX_BYTES
from core.errors import RecordEncodeError, StructuralMismatchError


def encode_shape(shape: RecordShape, record: object) -> bytes:
    """Encode a record with the given shape.

    Args:
        shape: Target layout.
        record: Instance of the shape's record type.

    Returns:
        Encoded bytes.

    Raises:
        RecordEncodeError: If the record does not fit the shape.
    """
    if not isinstance(record, shape.record_type):
        raise RecordEncodeError(
            f"Cannot encode {type(record).__name__} as shape '{shape.name}': "
            f"expected {shape.record_type.__name__}."
        )
    try:
        return shape.struct.build(shape.to_payload(record))
    except (ConstructError, UnicodeEncodeError) as error:
        raise RecordEncodeError(
            f"Cannot encode {type(record).__name__} as shape '{shape.name}': {error}"
        ) from error


def decode_shape(shape: RecordShape, data: bytes) -> Any:
    """Decode bytes that must exactly match the given shape.

    Args:
        shape: Expected layout.
        data: Encoded bytes.

    Returns:
        Record instance of the shape's record type.

    Raises:
        StructuralMismatchError: If bytes are short, malformed, or leave a remainder.
    """
    stream = io.BytesIO(data)
    try:
        payload = shape.struct.parse_stream(stream)
    except (ConstructError, UnicodeDecodeError) as error:
        raise StructuralMismatchError(
            f"Bytes do not match shape '{shape.name}': {error}"
        ) from error
    trailing_count = len(data) - stream.tell()
    if trailing_count:
        raise StructuralMismatchError(
            f"Bytes do not match shape '{shape.name}': "
            f"{trailing_count} trailing byte(s) after last field."
        )
    return shape.from_payload(payload)


def encode_discriminant(discriminant: int) -> bytes:
    """Encode a union tag as a single unsigned byte."""
    try:
        return Int8ul.build(discriminant)
    except ConstructError as error:
        raise RecordEncodeError(f"Invalid union discriminant {discriminant}: {error}") from error


def split_discriminant(data: bytes) -> tuple[int, bytes]:
    """Split a union tag from its payload.

    Args:
        data: Tagged bytes.

    Returns:
        Discriminant value and remaining payload bytes.

    Raises:
        StructuralMismatchError: If there is no tag byte.
    """
    try:
        discriminant = Int8ul.parse(data[:DISCRIMINANT_BYTES])
    except ConstructError as error:
        raise StructuralMismatchError(f"Missing union discriminant: {error}") from error
    return discriminant, data[DISCRIMINANT_BYTES:]


def read_length_prefix(data: bytes) -> int | None:
    """Return the leading u32 length prefix, or None when data is too short."""
    try:
        return Int32ul.parse(data[:STRING_LENGTH_PREFIX_BYTES])
    except ConstructError:
        return None


def record_digest(data: bytes) -> str:
    """Return the hex digest identifying committed record bytes."""
    return hashlib.new(HASH_ALGORITHM, data).hexdigest()
