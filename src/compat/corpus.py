"""Historical encoded-sample corpus persistence.

The corpus pins one encoded sample per byte layout the system has ever
written. Samples are stored as YAML so reviewers can read them, and every
new variant must keep decoding them to the same values.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping, cast

import yaml

from core.constants import CORPUS_FORMAT_VERSION, LEGACY_VARIANT_LABEL
from core.errors import CompatibilityCorpusError
from core.types import Genre, MovieV1, MovieV2, VersionedMovie
from records.versioned_movie import MOVIE_VARIANTS, encode_current, encode_legacy, encode_versioned

SampleVariant = Literal["legacy", "v1", "v2"]
SUPPORTED_SAMPLE_VARIANTS: tuple[str, ...] = (LEGACY_VARIANT_LABEL,) + tuple(
    variant.label for variant in MOVIE_VARIANTS
)
_SAMPLE_KEYS = ("sample_id", "variant", "encoded_hex", "fields")


@dataclass(frozen=True)
class CorpusSample:
    """One historical encoded movie.

    Attributes:
        sample_id: Stable identifier for reporting.
        variant: Layout that produced the bytes ("legacy" for untagged bytes).
        encoded_hex: Encoded bytes as lowercase hex.
        fields: Expected decoded field values, genre given by member name.
    """

    sample_id: str
    variant: SampleVariant
    encoded_hex: str
    fields: Mapping[str, str]

    @property
    def encoded_bytes(self) -> bytes:
        """Return sample bytes."""
        return bytes.fromhex(self.encoded_hex)


def record_fields(record: VersionedMovie) -> dict[str, str]:
    """Render record fields as corpus-friendly strings."""
    fields = {"title": record.title, "genre": record.genre.name}
    if isinstance(record, MovieV2):
        fields["imdb_url"] = record.imdb_url
    return fields


def build_reference_corpus() -> tuple[CorpusSample, ...]:
    """Build one sample for every layout written so far.

    Returns:
        Samples ordered from oldest to newest layout.
    """
    legacy_movie = MovieV1(title="Back To The Future", genre=Genre.SCIENCE_FICTION)
    tagged_v1_movie = MovieV1(title="Inception", genre=Genre.SCIENCE_FICTION)
    current_movie = MovieV2(
        title="Inception",
        genre=Genre.SCIENCE_FICTION,
        imdb_url="https://www.imdb.com/title/tt1375666/",
    )
    return (
        _sample("legacy-back-to-the-future", "legacy", encode_legacy(legacy_movie), legacy_movie),
        _sample("v1-inception", "v1", encode_versioned(tagged_v1_movie), tagged_v1_movie),
        _sample("v2-inception", "v2", encode_current(current_movie), current_movie),
    )


def _sample(
    sample_id: str,
    variant: SampleVariant,
    encoded: bytes,
    record: VersionedMovie,
) -> CorpusSample:
    return CorpusSample(
        sample_id=sample_id,
        variant=variant,
        encoded_hex=encoded.hex(),
        fields=record_fields(record),
    )


def save_corpus(corpus_path: Path, samples: tuple[CorpusSample, ...]) -> Path:
    """Write samples to a YAML corpus file.

    Args:
        corpus_path: Output file path.
        samples: Samples to persist.

    Returns:
        Resolved corpus path.

    Raises:
        CompatibilityCorpusError: If the file cannot be written.
    """
    resolved_path = corpus_path.expanduser().resolve()
    payload = {
        "version": CORPUS_FORMAT_VERSION,
        "samples": [
            {
                "sample_id": sample.sample_id,
                "variant": sample.variant,
                "encoded_hex": sample.encoded_hex,
                "fields": dict(sample.fields),
            }
            for sample in samples
        ],
    }
    try:
        resolved_path.parent.mkdir(parents=True, exist_ok=True)
        resolved_path.write_text(yaml.safe_dump(payload, sort_keys=True), encoding="utf-8")
    except OSError as error:
        raise CompatibilityCorpusError(
            f"Failed to write corpus at {resolved_path}: {error}. "
            "Check directory permissions and retry."
        ) from error
    return resolved_path


def load_corpus(corpus_path: Path) -> tuple[CorpusSample, ...]:
    """Load and validate a YAML corpus file.

    Args:
        corpus_path: Corpus file path.

    Returns:
        Parsed samples in file order.

    Raises:
        CompatibilityCorpusError: If the file is missing or malformed.
    """
    resolved_path = corpus_path.expanduser().resolve()
    payload = _load_yaml_payload(resolved_path)
    root = _expect_mapping(payload, "corpus root")
    version = root.get("version")
    if version != CORPUS_FORMAT_VERSION:
        raise CompatibilityCorpusError(
            f"Unsupported corpus version {version!r} in {resolved_path}; "
            f"expected {CORPUS_FORMAT_VERSION}."
        )
    raw_samples = root.get("samples")
    if not isinstance(raw_samples, list):
        raise CompatibilityCorpusError(
            f"Invalid corpus at {resolved_path}: 'samples' must be a list."
        )
    return tuple(
        _parse_sample(raw_sample, index) for index, raw_sample in enumerate(raw_samples, 1)
    )


def _load_yaml_payload(corpus_path: Path) -> object:
    if not corpus_path.exists():
        raise CompatibilityCorpusError(
            f"Corpus file does not exist at {corpus_path}. "
            "Set MOVIECODEC_CORPUS_PATH to a valid YAML file."
        )
    try:
        payload = cast(object, yaml.safe_load(corpus_path.read_text(encoding="utf-8")))
    except OSError as error:
        raise CompatibilityCorpusError(
            f"Failed to read corpus at {corpus_path}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise CompatibilityCorpusError(
            f"Failed to parse YAML corpus at {corpus_path}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise CompatibilityCorpusError(
            f"Corpus at {corpus_path} is empty. Define 'version' and 'samples'."
        )
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise CompatibilityCorpusError(
            f"Invalid {context}: expected mapping, got {type(value).__name__}."
        )
    return {str(key): item for key, item in value.items()}


def _parse_sample(raw_sample: object, index: int) -> CorpusSample:
    context = f"corpus sample #{index}"
    sample_mapping = _expect_mapping(raw_sample, context)
    missing_keys = [key for key in _SAMPLE_KEYS if key not in sample_mapping]
    if missing_keys:
        raise CompatibilityCorpusError(
            f"Invalid {context}: missing keys {', '.join(missing_keys)}."
        )
    sample_id = _expect_str(sample_mapping["sample_id"], f"{context} sample_id")
    variant = _expect_str(sample_mapping["variant"], f"{context} variant")
    if variant not in SUPPORTED_SAMPLE_VARIANTS:
        raise CompatibilityCorpusError(
            f"Invalid {context}: unknown variant '{variant}'. "
            f"Supported variants: {', '.join(SUPPORTED_SAMPLE_VARIANTS)}."
        )
    encoded_hex = _expect_str(sample_mapping["encoded_hex"], f"{context} encoded_hex")
    encoded_hex = encoded_hex.strip().lower()
    try:
        bytes.fromhex(encoded_hex)
    except ValueError as error:
        raise CompatibilityCorpusError(
            f"Invalid {context}: encoded_hex is not valid hex."
        ) from error
    fields = _expect_mapping(sample_mapping["fields"], f"{context} fields")
    return CorpusSample(
        sample_id=sample_id,
        variant=cast(SampleVariant, variant),
        encoded_hex=encoded_hex,
        fields={
            key: _expect_str(value, f"{context} field '{key}'") for key, value in fields.items()
        },
    )


def _expect_str(value: object, context: str) -> str:
    if not isinstance(value, str):
        raise CompatibilityCorpusError(
            f"Invalid {context}: expected string, got {type(value).__name__}. "
            "Quote the value in YAML."
        )
    return value
