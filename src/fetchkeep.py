"""Public SDK surface for fetchkeep.

This module provides a stable import path for library users.
It re-exports the primary client and typed option models.
"""

from __future__ import annotations

from core.config import FetchKeepConfig
from core.errors import (
    FetchKeepConfigError,
    FetchKeepError,
    FetchKeepHTTPError,
    FetchKeepIOError,
    FetchKeepNetworkError,
    FetchKeepStoreError,
)
from core.types import (
    CommitMetadata,
    CommitRecord,
    ContentBlob,
    FetchOptions,
    FetchResult,
    FileOrigin,
    StdinOrigin,
    UrlOrigin,
)
from store.dataset_sdk import Dataset, FetchKeepClient

__all__ = [
    "CommitMetadata",
    "CommitRecord",
    "ContentBlob",
    "Dataset",
    "FetchKeepClient",
    "FetchKeepConfig",
    "FetchKeepConfigError",
    "FetchKeepError",
    "FetchKeepHTTPError",
    "FetchKeepIOError",
    "FetchKeepNetworkError",
    "FetchKeepStoreError",
    "FetchOptions",
    "FetchResult",
    "FileOrigin",
    "StdinOrigin",
    "UrlOrigin",
]
