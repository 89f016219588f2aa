"""Compatibility verification over the historical sample corpus."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Literal

from compat.corpus import CorpusSample, load_corpus, record_fields
from core.config import CodecConfig
from core.constants import LEGACY_SOURCE_FORMAT, LEGACY_VARIANT_LABEL, TAGGED_SOURCE_FORMAT
from core.errors import CompatibilityCheckError, StructuralMismatchError
from core.logging_config import get_logger
from records.compatibility_decoder import decode_with_provenance
from records.versioned_movie import decode_legacy, decode_tagged, variant_for_record

CheckStatus = Literal["passed", "failed"]

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CompatibilityCheckResult:
    """One compatibility check result row."""

    check_id: str
    title: str
    status: CheckStatus
    details: str
    duration_seconds: float


@dataclass(frozen=True)
class CompatibilityReport:
    """Results of every check run against a corpus."""

    sample_count: int
    checks: tuple[CompatibilityCheckResult, ...]

    @property
    def failed_count(self) -> int:
        """Count failed checks in this report."""
        return sum(1 for check in self.checks if check.status == "failed")

    @property
    def passed_count(self) -> int:
        """Count passed checks in this report."""
        return sum(1 for check in self.checks if check.status == "passed")


def verify_corpus(
    samples: tuple[CorpusSample, ...],
    fail_fast: bool = False,
) -> CompatibilityReport:
    """Check that every sample still decodes to its pinned values.

    Each sample gets a decode check followed by an ambiguity check.
    """
    results: list[CompatibilityCheckResult] = []
    for sample in samples:
        for check_id, title, check_fn in _sample_checks(sample):
            result = _run_single_check(check_id, title, check_fn, sample)
            results.append(result)
            if result.status == "failed" and fail_fast:
                return CompatibilityReport(sample_count=len(samples), checks=tuple(results))
    return CompatibilityReport(sample_count=len(samples), checks=tuple(results))


def verify_corpus_file(config: CodecConfig) -> CompatibilityReport:
    """Load the configured corpus and verify it."""
    samples = load_corpus(config.corpus_path)
    report = verify_corpus(samples, fail_fast=config.fail_fast)
    _LOGGER.info(
        "compatibility_verification_finished",
        corpus_path=str(config.corpus_path),
        sample_count=report.sample_count,
        passed=report.passed_count,
        failed=report.failed_count,
    )
    return report


def check_layout_distinct(sample: CorpusSample) -> str:
    """Fail if sample bytes decode under both tagged and legacy layouts differently.

    Raises:
        CompatibilityCheckError: If both layouts accept the bytes with different values.
    """
    encoded = sample.encoded_bytes
    tagged_record = _try_decode(decode_tagged, encoded)
    legacy_record = _try_decode(decode_legacy, encoded)
    if tagged_record is not None and legacy_record is not None and tagged_record != legacy_record:
        raise CompatibilityCheckError(
            f"Ambiguous bytes: tagged layout gives {tagged_record!r}, "
            f"legacy layout gives {legacy_record!r}."
        )
    accepted_by = [
        layout_name
        for layout_name, record in (("tagged", tagged_record), ("legacy", legacy_record))
        if record is not None
    ]
    return f"accepted_by={','.join(accepted_by) or 'none'}"


def check_sample_decodes(sample: CorpusSample) -> str:
    """Fail if a sample no longer decodes to its pinned variant and fields.

    Raises:
        CompatibilityCheckError: If variant, provenance, or field values differ.
    """
    decoded = decode_with_provenance(sample.encoded_bytes)
    expected_format = (
        LEGACY_SOURCE_FORMAT if sample.variant == LEGACY_VARIANT_LABEL else TAGGED_SOURCE_FORMAT
    )
    if decoded.source_format != expected_format:
        raise CompatibilityCheckError(
            f"Expected {expected_format} bytes, decoder used {decoded.source_format} layout."
        )
    variant_label = variant_for_record(decoded.record).label
    if sample.variant != LEGACY_VARIANT_LABEL and variant_label != sample.variant:
        raise CompatibilityCheckError(
            f"Expected variant {sample.variant}, decoded {variant_label}."
        )
    actual_fields = record_fields(decoded.record)
    if actual_fields != dict(sample.fields):
        raise CompatibilityCheckError(
            f"Expected fields {dict(sample.fields)}, decoded {actual_fields}."
        )
    return f"variant={variant_label} source={decoded.source_format}"


def _sample_checks(
    sample: CorpusSample,
) -> tuple[tuple[str, str, Callable[[CorpusSample], str]], ...]:
    return (
        (f"{sample.sample_id}:decode", "Sample decodes to pinned values", check_sample_decodes),
        (f"{sample.sample_id}:ambiguity", "Sample bytes are unambiguous", check_layout_distinct),
    )


def _run_single_check(
    check_id: str,
    title: str,
    check_fn: Callable[[CorpusSample], str],
    sample: CorpusSample,
) -> CompatibilityCheckResult:
    started_at = time.monotonic()
    status: CheckStatus
    try:
        details = str(check_fn(sample))
        status = "passed"
    except Exception as error:
        details = str(error)
        status = "failed"
    return CompatibilityCheckResult(
        check_id=check_id,
        title=title,
        status=status,
        details=details,
        duration_seconds=round(time.monotonic() - started_at, 3),
    )


def _try_decode(
    decode_fn: Callable[[bytes], object],
    encoded: bytes,
) -> object | None:
    try:
        return decode_fn(encoded)
    except StructuralMismatchError:
        return None


def render_compatibility_report(report: CompatibilityReport) -> str:
    """Render report into stable multi-line text."""
    lines = [f"samples={report.sample_count}"]
    for row in report.checks:
        lines.append(
            f"[{row.status.upper()}] {row.check_id} {row.title} "
            f"({row.duration_seconds:.3f}s) :: {row.details}"
        )
    lines.append(f"passed={report.passed_count}")
    lines.append(f"failed={report.failed_count}")
    return "\n".join(lines)
