"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import CodecConfig
from core.errors import CodecConfigError


def test_from_env_reads_corpus_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve corpus path from environment."""
    monkeypatch.setenv("MOVIECODEC_CORPUS_PATH", "./.tmp-corpus/samples.yaml")

    config = CodecConfig.from_env()

    assert config.corpus_path.name == "samples.yaml"
    assert config.corpus_path.is_absolute()


def test_from_env_defaults_fail_fast_off(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should leave fail-fast disabled when unset."""
    monkeypatch.delenv("MOVIECODEC_FAIL_FAST", raising=False)

    config = CodecConfig.from_env()

    assert config.fail_fast is False


@pytest.mark.parametrize("raw_value", ["1", "true", "YES", " on "])
def test_from_env_parses_truthy_fail_fast(
    monkeypatch: pytest.MonkeyPatch,
    raw_value: str,
) -> None:
    """Config should accept common truthy spellings."""
    monkeypatch.setenv("MOVIECODEC_FAIL_FAST", raw_value)

    assert CodecConfig.from_env().fail_fast is True


def test_from_env_raises_for_invalid_fail_fast(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-boolean fail-fast flag."""
    monkeypatch.setenv("MOVIECODEC_FAIL_FAST", "sometimes")

    with pytest.raises(CodecConfigError):
        CodecConfig.from_env()

    assert os.getenv("MOVIECODEC_FAIL_FAST") == "sometimes"
