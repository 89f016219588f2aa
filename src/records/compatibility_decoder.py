"""Decode movie bytes of any historical vintage.

Bytes are first read as the tagged union. Only when that fails, either
because the discriminant is unknown or the payload does not fit, the whole
input is read again as the untagged legacy layout. Failing both is terminal.

The tagged read always wins, which leaves one known collision: legacy bytes
whose title length is 0 or 1 modulo 256 put a valid discriminant in the
first byte, and when the title starts with NUL (or the record exceeds
16 MiB) the remaining bytes can also frame a complete tagged variant. Such
bytes decode as that variant. When the legacy framing fits as well and
gives a different value, a ``decode_ambiguous_bytes`` warning is logged.
"""

from __future__ import annotations

from core.constants import LEGACY_SOURCE_FORMAT, TAGGED_SOURCE_FORMAT
from core.errors import StructuralMismatchError, UndecodableRecordError
from core.logging_config import get_logger
from core.types import DecodedRecord, VersionedMovie
from records.versioned_movie import decode_legacy, decode_tagged, legacy_reading

_LOGGER = get_logger(__name__)


def decode_compatible(data: bytes) -> VersionedMovie:
    """Decode bytes written by any past or current version.

    Args:
        data: Encoded movie bytes.

    Returns:
        The decoded variant.

    Raises:
        UndecodableRecordError: If bytes match neither the union nor the legacy layout.
    """
    return decode_with_provenance(data).record


def decode_with_provenance(data: bytes) -> DecodedRecord:
    """Decode bytes and report which layout recognized them.

    Args:
        data: Encoded movie bytes.

    Returns:
        Decoded record with its source format.

    Raises:
        UndecodableRecordError: If bytes match neither the union nor the legacy layout.
    """
    raw_bytes = memoryview(data).tobytes()
    try:
        record = decode_tagged(raw_bytes)
    except StructuralMismatchError as tagged_error:
        _LOGGER.debug(
            "decode_fallback_to_legacy",
            byte_count=len(raw_bytes),
            reason=str(tagged_error),
        )
        return _decode_legacy_fallback(raw_bytes, tagged_error)
    _warn_if_ambiguous(raw_bytes, record)
    return DecodedRecord(record=record, source_format=TAGGED_SOURCE_FORMAT)


def _warn_if_ambiguous(raw_bytes: bytes, record: VersionedMovie) -> None:
    legacy_record = legacy_reading(raw_bytes)
    if legacy_record is not None and legacy_record != record:
        _LOGGER.warning(
            "decode_ambiguous_bytes",
            byte_count=len(raw_bytes),
            tagged_record=repr(record)[:200],
            legacy_record=repr(legacy_record)[:200],
        )


def _decode_legacy_fallback(
    raw_bytes: bytes,
    tagged_error: StructuralMismatchError,
) -> DecodedRecord:
    try:
        record = decode_legacy(raw_bytes)
    except StructuralMismatchError as legacy_error:
        _LOGGER.warning(
            "decode_failed",
            byte_count=len(raw_bytes),
            tagged_reason=str(tagged_error),
            legacy_reason=str(legacy_error),
        )
        raise UndecodableRecordError(
            f"Movie bytes ({len(raw_bytes)} bytes) match no known layout. "
            f"Tagged decode: {tagged_error}. Legacy decode: {legacy_error}."
        ) from legacy_error
    return DecodedRecord(record=record, source_format=LEGACY_SOURCE_FORMAT)
