"""Dataset locator parsing helpers.

This module parses the destination argument used by fetch and read commands.
It keeps locator validation behavior consistent across CLI and SDK.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.constants import LOCATOR_SEPARATOR
from core.errors import FetchKeepConfigError


@dataclass(frozen=True)
class DatasetLocator:
    """Parsed dataset destination.

    Attributes:
        store_root: Explicit store root, or ``None`` for the configured one.
        dataset_name: Dataset identifier inside the store.
    """

    store_root: Path | None
    dataset_name: str

    def resolve_store_root(self, default_root: Path) -> Path:
        """Return the explicit store root, falling back to ``default_root``."""
        return self.store_root if self.store_root is not None else default_root


def parse_dataset_locator(locator: str) -> DatasetLocator:
    """Parse and validate a dataset locator.

    Args:
        locator: ``<store-path>::<dataset>`` or a bare ``<dataset>``.

    Returns:
        Parsed store root and dataset name.

    Raises:
        FetchKeepConfigError: If either part is empty.
    """
    if LOCATOR_SEPARATOR not in locator:
        if not locator.strip():
            _raise_locator_error(locator)
        return DatasetLocator(store_root=None, dataset_name=locator.strip())
    store_part, dataset_part = locator.rsplit(LOCATOR_SEPARATOR, 1)
    if not store_part.strip() or not dataset_part.strip():
        _raise_locator_error(locator)
    return DatasetLocator(
        store_root=Path(store_part).expanduser().resolve(),
        dataset_name=dataset_part.strip(),
    )


def _raise_locator_error(locator: str) -> None:
    """Raise an invalid locator error.

    Args:
        locator: Invalid locator value.

    Raises:
        FetchKeepConfigError: Always.
    """
    raise FetchKeepConfigError(
        f"Invalid dataset locator '{locator}': expected <store-path>::<dataset> "
        "or <dataset>. Provide a non-empty store path and dataset name."
    )
