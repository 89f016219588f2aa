"""Public SDK surface for the movie codec.

This module provides a stable import path for storage layers.
It re-exports the encode/decode operations and typed record models.
"""

from __future__ import annotations

from codec.binary_codec import record_digest
from compat.corpus import CorpusSample, build_reference_corpus, load_corpus, save_corpus
from compat.verification import (
    CompatibilityReport,
    render_compatibility_report,
    verify_corpus,
    verify_corpus_file,
)
from core.config import CodecConfig
from core.errors import (
    CompatibilityCheckError,
    MovieCodecError,
    RecordEncodeError,
    UndecodableRecordError,
)
from core.types import DecodedRecord, Genre, Movie, MovieV1, MovieV2, VersionedMovie
from records.compatibility_decoder import decode_compatible, decode_with_provenance
from records.versioned_movie import CURRENT_VARIANT, encode_current, upgrade_to_current

__all__ = [
    "CURRENT_VARIANT",
    "CodecConfig",
    "CompatibilityCheckError",
    "CompatibilityReport",
    "CorpusSample",
    "DecodedRecord",
    "Genre",
    "Movie",
    "MovieCodecError",
    "MovieV1",
    "MovieV2",
    "RecordEncodeError",
    "UndecodableRecordError",
    "VersionedMovie",
    "build_reference_corpus",
    "decode_compatible",
    "decode_with_provenance",
    "encode_current",
    "load_corpus",
    "record_digest",
    "render_compatibility_report",
    "save_corpus",
    "upgrade_to_current",
    "verify_corpus",
    "verify_corpus_file",
]
