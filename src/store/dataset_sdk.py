"""Python SDK for fetch and dataset operations.

This module exposes high-level APIs for fetching sources into datasets
and inspecting their commit history, backed by the local dataset store.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import BinaryIO

from core.config import FetchKeepConfig
from core.dataset_locator import parse_dataset_locator
from core.types import CommitMetadata, CommitRecord, ContentBlob, FetchOptions, FetchResult
from ingest.pipeline import fetch_into_dataset
from store.dataset_store import DatasetHandle, DatasetStore


class FetchKeepClient:
    """Primary SDK entry point."""

    def __init__(self, config: FetchKeepConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or FetchKeepConfig.from_env()

    @property
    def config(self) -> FetchKeepConfig:
        """Return the runtime configuration."""
        return self._config

    def fetch(self, options: FetchOptions, stdin: BinaryIO | None = None) -> FetchResult:
        """Fetch a source into a dataset, committing only changed content.

        Args:
            options: Fetch options.
            stdin: Optional binary stream replacing process stdin.

        Returns:
            Fetch outcome.
        """
        return fetch_into_dataset(options, self._config, stdin=stdin)

    def dataset(self, locator: str) -> "Dataset":
        """Get a read handle for an existing dataset from a locator.

        Args:
            locator: ``<store-path>::<dataset>`` or a bare dataset name.

        Returns:
            Dataset handle.

        Raises:
            FetchKeepStoreError: If the dataset does not exist.
        """
        parsed = parse_dataset_locator(locator)
        store = DatasetStore(parsed.resolve_store_root(self._config.data_root), create=False)
        return Dataset(store.open_dataset(parsed.dataset_name))

    def with_data_root(self, data_root: str) -> "FetchKeepClient":
        """Clone the client with a different default store root.

        Args:
            data_root: New data root path.

        Returns:
            New SDK client instance.
        """
        resolved_root = Path(data_root).expanduser().resolve()
        return FetchKeepClient(replace(self._config, data_root=resolved_root))


class Dataset:
    """SDK dataset handle for read access to a commit chain."""

    def __init__(self, handle: DatasetHandle) -> None:
        self._handle = handle

    @property
    def name(self) -> str:
        """Return dataset identifier."""
        return self._handle.name

    def height(self) -> int:
        """Return head height, 0 when the dataset is empty."""
        return self._handle.head_height()

    def head(self) -> CommitRecord | None:
        """Return the head commit, if any."""
        return self._handle.head_commit()

    def head_metadata(self) -> CommitMetadata | None:
        """Return head commit metadata, if any."""
        return self._handle.head_metadata()

    def head_value(self) -> ContentBlob | None:
        """Return the head commit value, if any."""
        return self._handle.head_value()

    def list_commits(self) -> list[CommitRecord]:
        """Return commits ordered from root to head."""
        return self._handle.list_commits()
