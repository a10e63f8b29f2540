"""Fetch orchestration for conditional commits.

This module coordinates origin resolution, cache-token recovery, source
reads, change detection, and the single dataset append per invocation.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import BinaryIO

from core.config import FetchKeepConfig
from core.dataset_locator import parse_dataset_locator
from core.logging_config import get_logger
from core.types import (
    ContentBlob,
    FetchOptions,
    FetchResult,
    FileOrigin,
    Origin,
    UrlOrigin,
)
from ingest.change_detector import Changed, Unchanged, detect_change
from ingest.metadata_builder import build_commit_metadata
from ingest.origin import resolve_origin
from ingest.source_reader import read_source
from store.dataset_store import DatasetHandle, DatasetStore

_LOGGER = get_logger(__name__)


class FetchPipelineRunner:
    """Runner for one fetch-and-commit invocation."""

    def __init__(
        self,
        options: FetchOptions,
        config: FetchKeepConfig,
        stdin: BinaryIO | None = None,
    ) -> None:
        self._options = options
        self._config = config
        self._stdin = stdin
        self._locator = parse_dataset_locator(options.destination)
        self._origin = resolve_origin(options.source, options.use_stdin)

    @property
    def origin(self) -> Origin:
        """Return the resolved content origin."""
        return self._origin

    def run(self) -> FetchResult:
        """Execute the fetch and return what happened to the dataset."""
        store_root = self._locator.resolve_store_root(self._config.data_root)
        dataset = DatasetStore(store_root).open_or_create_dataset(self._locator.dataset_name)
        cache_token = self._recover_cache_token(dataset)
        fetched_at = datetime.now(timezone.utc)
        _LOGGER.info(
            "fetch_started",
            dataset_name=dataset.name,
            origin=_describe_origin(self._origin),
            conditional=cache_token is not None,
        )
        fetch = read_source(self._origin, cache_token, self._config, stdin=self._stdin)
        change = detect_change(self._origin, fetch, cache_token)
        if isinstance(change, Unchanged):
            return self._skip_unchanged(dataset, cache_token)
        return self._persist_changed(dataset, change, fetched_at)

    def _recover_cache_token(self, dataset: DatasetHandle) -> str | None:
        if not isinstance(self._origin, UrlOrigin):
            return None
        head_metadata = dataset.head_metadata()
        if head_metadata is None:
            return None
        return head_metadata.etag or None

    def _skip_unchanged(self, dataset: DatasetHandle, cache_token: str | None) -> FetchResult:
        height = dataset.head_height()
        _LOGGER.info(
            "fetch_unchanged",
            dataset_name=dataset.name,
            origin=_describe_origin(self._origin),
            etag=cache_token,
            height=height,
        )
        return FetchResult(status="unchanged", dataset_name=dataset.name, height=height)

    def _persist_changed(
        self,
        dataset: DatasetHandle,
        change: Changed,
        fetched_at: datetime,
    ) -> FetchResult:
        blob = ContentBlob(data=change.body)
        if not self._options.commit:
            value_hash = dataset.write_value(blob)
            return FetchResult(
                status="written",
                dataset_name=dataset.name,
                height=dataset.head_height(),
                value_hash=value_hash,
            )
        meta = build_commit_metadata(self._origin, fetched_at, change.new_token)
        commit = dataset.commit_record(blob, meta)
        _LOGGER.info(
            "fetch_committed",
            dataset_name=dataset.name,
            origin=_describe_origin(self._origin),
            height=commit.height,
            value_hash=commit.value_hash,
            size_bytes=len(blob),
            meta_fields=sorted(meta.fields()),
        )
        return FetchResult(
            status="committed",
            dataset_name=dataset.name,
            height=commit.height,
            value_hash=commit.value_hash,
            commit_id=commit.commit_id,
        )


def fetch_into_dataset(
    options: FetchOptions,
    config: FetchKeepConfig,
    stdin: BinaryIO | None = None,
) -> FetchResult:
    """Fetch a source and commit it when its content changed.

    Args:
        options: Fetch request options.
        config: Runtime configuration.
        stdin: Optional binary stream replacing process stdin.

    Returns:
        Fetch outcome with the dataset height after the invocation.

    Raises:
        FetchKeepConfigError: If the source or destination arguments are invalid.
        FetchKeepIOError: If stdin or a local file cannot be read.
        FetchKeepNetworkError: If a URL cannot be reached.
        FetchKeepHTTPError: If a URL answers with an unusable status.
        FetchKeepStoreError: If the dataset cannot be read or written.
    """
    runner = FetchPipelineRunner(options, config, stdin=stdin)
    return runner.run()


def _describe_origin(origin: Origin) -> str:
    """Render an origin for log fields."""
    if isinstance(origin, UrlOrigin):
        return origin.address
    if isinstance(origin, FileOrigin):
        return f"file:{origin.path}"
    return "stdin"
