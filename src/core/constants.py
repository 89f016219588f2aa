"""Core constants used across movie codec modules.

This module centralizes wire-level and configuration constants.
Keeping values here avoids magic literals in codec logic.
"""

from __future__ import annotations

from pathlib import Path

MOVIE_V1_DISCRIMINANT = 0
MOVIE_V2_DISCRIMINANT = 1
DISCRIMINANT_BYTES = 1
STRING_LENGTH_PREFIX_BYTES = 4
GENRE_BYTES = 1
STRING_ENCODING = "utf8"
HASH_ALGORITHM = "sha256"
DEFAULT_CORPUS_PATH = Path("compat_corpus.yaml")
CORPUS_FORMAT_VERSION = 1
LEGACY_VARIANT_LABEL = "legacy"
TAGGED_SOURCE_FORMAT = "tagged"
LEGACY_SOURCE_FORMAT = "legacy"
TRUE_ENV_VALUES = ("1", "true", "yes", "on")
FALSE_ENV_VALUES = ("0", "false", "no", "off", "")
