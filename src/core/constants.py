"""Core constants used across fetchkeep modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".fetchkeep")
DATASETS_DIR_NAME = "datasets"
BLOBS_DIR_NAME = "blobs"
COMMITS_DIR_NAME = "commits"
CATALOG_FILE_NAME = "catalog.json"
HASH_ALGORITHM = "sha256"
LOCATOR_SEPARATOR = "::"
URL_SCHEMES = ("http", "https")
DEFAULT_READ_CHUNK_SIZE = 64 * 1024
DEFAULT_PROGRESS_INTERVAL_BYTES = 1024 * 1024
HTTP_NOT_MODIFIED = 304
IF_NONE_MATCH_HEADER = "If-None-Match"
ETAG_HEADER = "ETag"
META_FIELD_DATE = "date"
META_FIELD_FILE = "file"
META_FIELD_URL = "url"
META_FIELD_ETAG = "etag"
DATASET_NAME_PATTERN = r"[A-Za-z0-9._-]+"
RESERVED_DATASET_NAMES = frozenset({".", ".."})
