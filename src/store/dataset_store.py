"""Dataset store with linear, content-addressed commit chains.

This module owns dataset directories, commit files, and head pointers.
A commit becomes visible only when the catalog head pointer is replaced,
so readers never observe a partially written commit.
"""

from __future__ import annotations

import re
from pathlib import Path

from core.constants import (
    CATALOG_FILE_NAME,
    COMMITS_DIR_NAME,
    DATASET_NAME_PATTERN,
    DATASETS_DIR_NAME,
    RESERVED_DATASET_NAMES,
)
from core.errors import FetchKeepStoreError
from core.logging_config import get_logger
from core.types import CommitMetadata, CommitRecord, ContentBlob
from store.blob_store import BlobStore
from store.catalog_io import (
    build_commit_id,
    read_catalog_file,
    read_commit_file,
    write_catalog,
    write_commit_file,
)

_LOGGER = get_logger(__name__)


class DatasetStore:
    """Local store holding blobs and named datasets.

    Layout under ``store_root``::

        blobs/<aa>/<value_hash>
        datasets/<name>/catalog.json
        datasets/<name>/commits/<commit_id>.json
    """

    def __init__(self, store_root: Path, create: bool = True) -> None:
        """Initialize the store.

        Args:
            store_root: Root directory of the store.
            create: Create the root directories when missing. Read-only
                callers pass ``False`` so inspecting a store never writes.

        Raises:
            FetchKeepStoreError: If the root cannot be created.
        """
        self._store_root = store_root
        self._datasets_root = store_root / DATASETS_DIR_NAME
        if create:
            try:
                self._datasets_root.mkdir(parents=True, exist_ok=True)
            except OSError as error:
                raise FetchKeepStoreError(
                    f"Failed to open store at {store_root}: {error}. "
                    "Choose a writable destination directory."
                ) from error
        self._blobs = BlobStore(store_root)

    @property
    def store_root(self) -> Path:
        """Return the store root directory."""
        return self._store_root

    @property
    def blobs(self) -> BlobStore:
        """Return the shared blob store."""
        return self._blobs

    def open_or_create_dataset(self, dataset_name: str) -> "DatasetHandle":
        """Return a handle for a dataset, creating its directories if needed.

        Args:
            dataset_name: Dataset identifier.

        Returns:
            Dataset handle.

        Raises:
            FetchKeepStoreError: If the name is invalid or directories fail.
        """
        _validate_dataset_name(dataset_name)
        dataset_root = self._datasets_root / dataset_name
        try:
            (dataset_root / COMMITS_DIR_NAME).mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise FetchKeepStoreError(
                f"Failed to create dataset '{dataset_name}' at {dataset_root}: {error}. "
                "Choose a writable destination directory."
            ) from error
        return DatasetHandle(dataset_name, dataset_root, self._blobs)

    def open_dataset(self, dataset_name: str) -> "DatasetHandle":
        """Return a handle for an existing dataset without touching the disk.

        Args:
            dataset_name: Dataset identifier.

        Returns:
            Dataset handle.

        Raises:
            FetchKeepStoreError: If the name is invalid or the dataset is missing.
        """
        _validate_dataset_name(dataset_name)
        dataset_root = self._datasets_root / dataset_name
        if not dataset_root.is_dir():
            raise FetchKeepStoreError(
                f"Dataset '{dataset_name}' not found in store {self._store_root}. "
                "Check the dataset locator or fetch into it first."
            )
        return DatasetHandle(dataset_name, dataset_root, self._blobs)

    def list_datasets(self) -> list[str]:
        """List dataset names that have at least one commit."""
        if not self._datasets_root.is_dir():
            return []
        return sorted(
            path.name
            for path in self._datasets_root.iterdir()
            if (path / CATALOG_FILE_NAME).exists()
        )


def _validate_dataset_name(dataset_name: str) -> None:
    if (
        re.fullmatch(DATASET_NAME_PATTERN, dataset_name) is None
        or dataset_name in RESERVED_DATASET_NAMES
    ):
        raise FetchKeepStoreError(
            f"Invalid dataset name {dataset_name!r}: "
            "use letters, digits, '.', '_' or '-' only, and not '.' or '..'."
        )


class DatasetHandle:
    """Append-only commit chain for one dataset."""

    def __init__(self, dataset_name: str, dataset_root: Path, blobs: BlobStore) -> None:
        self._dataset_name = dataset_name
        self._dataset_root = dataset_root
        self._blobs = blobs

    @property
    def name(self) -> str:
        """Return dataset identifier."""
        return self._dataset_name

    def head_commit(self) -> CommitRecord | None:
        """Return the current head commit, or ``None`` for an empty dataset."""
        catalog = read_catalog_file(self._catalog_path)
        if catalog is None:
            return None
        return read_commit_file(self._commit_path(str(catalog["head"])))

    def head_metadata(self) -> CommitMetadata | None:
        """Return head commit metadata, or ``None`` for an empty dataset."""
        head = self.head_commit()
        return head.meta if head is not None else None

    def head_height(self) -> int:
        """Return the head commit height, 0 for an empty dataset."""
        head = self.head_commit()
        return head.height if head is not None else 0

    def head_value(self) -> ContentBlob | None:
        """Return the head commit value, or ``None`` for an empty dataset."""
        head = self.head_commit()
        if head is None:
            return None
        return self._blobs.read_blob(head.value_hash)

    def write_value(self, value: ContentBlob) -> str:
        """Write a blob without committing it.

        Returns:
            Content hash of the stored blob.
        """
        return self._blobs.write_blob(value)

    def commit(self, value: ContentBlob, meta: CommitMetadata) -> int:
        """Append a commit holding ``value`` as the new head.

        Args:
            value: Content to commit.
            meta: Provenance metadata for the commit.

        Returns:
            Height of the new head commit.

        Raises:
            FetchKeepStoreError: If any part of the commit cannot be persisted.
        """
        return self.commit_record(value, meta).height

    def commit_record(self, value: ContentBlob, meta: CommitMetadata) -> CommitRecord:
        """Append a commit and return the full persisted record."""
        parent = self.head_commit()
        value_hash = self._blobs.write_blob(value)
        height = parent.height + 1 if parent is not None else 1
        parent_id = parent.commit_id if parent is not None else None
        commit = CommitRecord(
            commit_id=build_commit_id(self._dataset_name, height, parent_id, value_hash, meta),
            dataset_name=self._dataset_name,
            height=height,
            parent_id=parent_id,
            value_hash=value_hash,
            meta=meta,
        )
        try:
            write_commit_file(self._commit_path(commit.commit_id), commit)
            write_catalog(self._catalog_path, self._dataset_name, commit)
        except OSError as error:
            raise FetchKeepStoreError(
                f"Failed to commit to dataset '{self._dataset_name}' at "
                f"{self._dataset_root}: {error}. Check write permissions and disk space."
            ) from error
        _LOGGER.info(
            "commit_created",
            dataset_name=self._dataset_name,
            commit_id=commit.commit_id,
            height=height,
            parent_id=parent_id,
            value_hash=value_hash,
        )
        return commit

    def list_commits(self) -> list[CommitRecord]:
        """Return the commit chain ordered from root to head."""
        commits: list[CommitRecord] = []
        current = self.head_commit()
        while current is not None:
            commits.append(current)
            if current.parent_id is None:
                break
            current = read_commit_file(self._commit_path(current.parent_id))
        commits.reverse()
        return commits

    @property
    def _catalog_path(self) -> Path:
        return self._dataset_root / CATALOG_FILE_NAME

    def _commit_path(self, commit_id: str) -> Path:
        return self._dataset_root / COMMITS_DIR_NAME / f"{commit_id}.json"
