"""Runtime configuration model for fetchkeep.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_PROGRESS_INTERVAL_BYTES,
    DEFAULT_READ_CHUNK_SIZE,
)
from core.errors import FetchKeepConfigError


@dataclass(frozen=True)
class FetchKeepConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Default local store root for datasets and blobs.
        http_timeout_seconds: Optional HTTP timeout; ``None`` waits indefinitely.
        read_chunk_size: Bytes requested per read from any source.
        progress_interval_bytes: Minimum bytes between progress log events.
    """

    data_root: Path
    http_timeout_seconds: float | None = None
    read_chunk_size: int = DEFAULT_READ_CHUNK_SIZE
    progress_interval_bytes: int = DEFAULT_PROGRESS_INTERVAL_BYTES

    @classmethod
    def from_env(cls) -> "FetchKeepConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            FetchKeepConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("FETCHKEEP_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        timeout_value = os.getenv("FETCHKEEP_HTTP_TIMEOUT")
        chunk_value = os.getenv("FETCHKEEP_READ_CHUNK_SIZE", str(DEFAULT_READ_CHUNK_SIZE))
        interval_value = os.getenv(
            "FETCHKEEP_PROGRESS_INTERVAL_BYTES", str(DEFAULT_PROGRESS_INTERVAL_BYTES)
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            http_timeout_seconds=_parse_timeout(timeout_value),
            read_chunk_size=_parse_positive_int("FETCHKEEP_READ_CHUNK_SIZE", chunk_value),
            progress_interval_bytes=_parse_positive_int(
                "FETCHKEEP_PROGRESS_INTERVAL_BYTES", interval_value
            ),
        )


def _parse_timeout(raw_value: str | None) -> float | None:
    """Parse the optional HTTP timeout environment value.

    Args:
        raw_value: Raw string from environment, or ``None`` when unset.

    Returns:
        Timeout in seconds, or ``None`` when unset or blank.

    Raises:
        FetchKeepConfigError: If value is not a positive number.
    """
    if raw_value is None or not raw_value.strip():
        return None
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise FetchKeepConfigError(
            "Invalid FETCHKEEP_HTTP_TIMEOUT value: "
            f"expected a number of seconds, got '{raw_value}'. "
            "Set FETCHKEEP_HTTP_TIMEOUT to a positive number or unset it."
        ) from error
    if timeout <= 0:
        raise FetchKeepConfigError(
            f"Invalid FETCHKEEP_HTTP_TIMEOUT value: expected > 0, got {timeout}. "
            "Set FETCHKEEP_HTTP_TIMEOUT to a positive number or unset it."
        )
    return timeout


def _parse_positive_int(variable_name: str, raw_value: str) -> int:
    """Parse a positive integer environment value.

    Args:
        variable_name: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        FetchKeepConfigError: If value is not a positive integer.
    """
    try:
        parsed = int(raw_value)
    except ValueError as error:
        raise FetchKeepConfigError(
            f"Invalid {variable_name} value: expected integer, got '{raw_value}'. "
            f"Set {variable_name} to a positive integer."
        ) from error
    if parsed <= 0:
        raise FetchKeepConfigError(
            f"Invalid {variable_name} value: expected > 0, got {parsed}. "
            f"Set {variable_name} to a positive integer."
        )
    return parsed
