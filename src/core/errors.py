"""Movie codec exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each stage of encoding and decoding raises a specific error type.
"""

from __future__ import annotations


class MovieCodecError(Exception):
    """Base exception for all movie codec failures."""


class CodecConfigError(MovieCodecError):
    """Raised for invalid runtime configuration."""


class StructuralMismatchError(MovieCodecError):
    """Raised when bytes do not exactly match the attempted shape."""


class UnrecognizedDiscriminantError(StructuralMismatchError):
    """Raised when a union tag does not name any known variant."""


class UndecodableRecordError(MovieCodecError):
    """Raised when bytes match neither the tagged union nor the legacy shape."""


class RecordEncodeError(MovieCodecError):
    """Raised when a value cannot be written as the current variant."""


class LayoutConflictError(MovieCodecError):
    """Raised when two record shapes would produce the same byte layout."""


class CompatibilityCorpusError(MovieCodecError):
    """Raised for unreadable or malformed compatibility sample corpora."""


class CompatibilityCheckError(MovieCodecError):
    """Raised when a corpus sample fails a compatibility check."""
