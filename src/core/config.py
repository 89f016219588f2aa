"""Runtime configuration model for the movie codec.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_CORPUS_PATH, FALSE_ENV_VALUES, TRUE_ENV_VALUES
from core.errors import CodecConfigError


@dataclass(frozen=True)
class CodecConfig:
    """Validated runtime configuration.

    Attributes:
        corpus_path: YAML file holding historical encoded samples.
        fail_fast: Stop corpus verification at the first failed sample.
    """

    corpus_path: Path
    fail_fast: bool

    @classmethod
    def from_env(cls) -> "CodecConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            CodecConfigError: If environment values are invalid.
        """
        corpus_path_value = os.getenv("MOVIECODEC_CORPUS_PATH", str(DEFAULT_CORPUS_PATH))
        fail_fast_value = os.getenv("MOVIECODEC_FAIL_FAST", "false")
        return cls(
            corpus_path=Path(corpus_path_value).expanduser().resolve(),
            fail_fast=_parse_bool_flag("MOVIECODEC_FAIL_FAST", fail_fast_value),
        )


def _parse_bool_flag(variable_name: str, raw_value: str) -> bool:
    """Parse a boolean environment flag.

    Args:
        variable_name: Environment variable name, used in errors.
        raw_value: Raw string from environment.

    Returns:
        Parsed flag value.

    Raises:
        CodecConfigError: If value is not a recognized boolean literal.
    """
    normalized_value = raw_value.strip().lower()
    if normalized_value in TRUE_ENV_VALUES:
        return True
    if normalized_value in FALSE_ENV_VALUES:
        return False
    accepted_values = ", ".join(value for value in TRUE_ENV_VALUES + FALSE_ENV_VALUES if value)
    raise CodecConfigError(
        f"Invalid {variable_name} value: "
        f"expected one of {accepted_values}, "
        f"got '{raw_value}'. Set {variable_name} to a boolean value."
    )
