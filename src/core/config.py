"""Runtime configuration model for storekey.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_SS58_FORMAT,
    MAX_SS58_FORMAT,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import StoreKeyConfigError


@dataclass(frozen=True)
class StoreKeyConfig:
    """Validated runtime configuration.

    Attributes:
        layout_path: Optional YAML storage layout catalog.
        ss58_format: Address format used when encoding account ids.
        log_level: Minimum level for structured log output.
    """

    layout_path: Path | None
    ss58_format: int
    log_level: str

    @classmethod
    def from_env(
        cls,
        layout_path: str | None = None,
        ss58_format: str | None = None,
    ) -> "StoreKeyConfig":
        """Build config from process environment variables.

        Explicit arguments take precedence over the matching variable, which
        is then neither read nor validated.

        Args:
            layout_path: Optional override for STOREKEY_LAYOUT_PATH.
            ss58_format: Optional override for STOREKEY_SS58_FORMAT.

        Returns:
            A validated config object.

        Raises:
            StoreKeyConfigError: If environment or override values are invalid.
        """
        layout_value = layout_path or os.getenv("STOREKEY_LAYOUT_PATH")
        ss58_value = ss58_format
        if ss58_value is None:
            ss58_value = os.getenv("STOREKEY_SS58_FORMAT", str(DEFAULT_SS58_FORMAT))
        log_level_value = os.getenv("STOREKEY_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        return cls(
            layout_path=Path(layout_value).expanduser().resolve() if layout_value else None,
            ss58_format=parse_ss58_format(ss58_value),
            log_level=_parse_log_level(log_level_value),
        )


def parse_ss58_format(raw_value: str) -> int:
    """Parse an SS58 address format value.

    Args:
        raw_value: Raw string from environment or CLI.

    Returns:
        Parsed integer format.

    Raises:
        StoreKeyConfigError: If value is not an integer in the SS58 range.
    """
    try:
        ss58_format = int(raw_value)
    except ValueError as error:
        raise StoreKeyConfigError(
            f"Invalid SS58 format: expected integer, got '{raw_value}'. "
            "Use a numeric network prefix, e.g. 42."
        ) from error
    if not 0 <= ss58_format <= MAX_SS58_FORMAT:
        raise StoreKeyConfigError(
            f"Invalid SS58 format {ss58_format}: "
            f"expected a value in [0, {MAX_SS58_FORMAT}]."
        )
    return ss58_format


def _parse_log_level(raw_value: str) -> str:
    normalized = raw_value.strip().upper()
    if normalized in SUPPORTED_LOG_LEVELS:
        return normalized
    supported_rows = ", ".join(SUPPORTED_LOG_LEVELS)
    raise StoreKeyConfigError(
        f"Invalid STOREKEY_LOG_LEVEL value '{raw_value}'. Use one of: {supported_rows}."
    )
