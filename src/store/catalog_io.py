"""Catalog and commit persistence helpers.

This module isolates JSON catalog IO and commit id generation.
It keeps dataset store orchestration focused on the commit flow.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

from core.constants import HASH_ALGORITHM
from core.errors import FetchKeepStoreError
from core.types import CommitMetadata, CommitRecord
from store.atomic_io import atomic_write_text


def build_commit_id(
    dataset_name: str,
    height: int,
    parent_id: str | None,
    value_hash: str,
    meta: CommitMetadata,
) -> str:
    """Build a content-derived commit id.

    Args:
        dataset_name: Dataset identifier.
        height: Chain height of the new commit.
        parent_id: Parent commit id, ``None`` for a root commit.
        value_hash: Committed blob hash.
        meta: Commit metadata.

    Returns:
        Hex digest of the canonical commit payload.
    """
    payload = {
        "dataset_name": dataset_name,
        "height": height,
        "parent_id": parent_id,
        "value_hash": value_hash,
        "meta": meta.fields(),
    }
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.new(HASH_ALGORITHM, serialized.encode("utf-8")).hexdigest()


def commit_to_payload(commit: CommitRecord) -> dict[str, object]:
    """Serialize a commit record into a JSON-safe payload."""
    return {
        "commit_id": commit.commit_id,
        "dataset_name": commit.dataset_name,
        "height": commit.height,
        "parent_id": commit.parent_id,
        "value_hash": commit.value_hash,
        "meta": commit.meta.fields(),
    }


def commit_from_payload(payload: dict[str, Any]) -> CommitRecord:
    """Deserialize a commit payload.

    Args:
        payload: Commit dictionary.

    Returns:
        Typed commit record.
    """
    return CommitRecord(
        commit_id=str(payload["commit_id"]),
        dataset_name=str(payload["dataset_name"]),
        height=int(payload["height"]),
        parent_id=str(payload["parent_id"]) if payload["parent_id"] else None,
        value_hash=str(payload["value_hash"]),
        meta=CommitMetadata.from_fields(dict(payload["meta"])),
    )


def write_commit_file(commit_path: Path, commit: CommitRecord) -> None:
    """Write one immutable commit file.

    Args:
        commit_path: Destination JSON path.
        commit: Commit to persist.
    """
    payload = commit_to_payload(commit)
    atomic_write_text(commit_path, json.dumps(payload, indent=2, sort_keys=True) + "\n")


def read_commit_file(commit_path: Path) -> CommitRecord:
    """Read and validate one commit file.

    Raises:
        FetchKeepStoreError: If the file is missing or invalid.
    """
    payload = _read_json_object(commit_path, "commit")
    try:
        return commit_from_payload(payload)
    except (KeyError, TypeError, ValueError) as error:
        raise FetchKeepStoreError(
            f"Failed to parse commit at {commit_path}: {error}. "
            "The dataset history is corrupt; restore it from a backup."
        ) from error


def write_catalog(catalog_path: Path, dataset_name: str, head: CommitRecord) -> None:
    """Point the dataset catalog at a new head commit.

    Args:
        catalog_path: Catalog JSON path.
        dataset_name: Dataset identifier.
        head: New head commit.
    """
    catalog = {
        "dataset_name": dataset_name,
        "head": head.commit_id,
        "height": head.height,
    }
    atomic_write_text(catalog_path, json.dumps(catalog, indent=2) + "\n")


def read_catalog_file(catalog_path: Path) -> dict[str, Any] | None:
    """Read the dataset catalog.

    Args:
        catalog_path: Catalog JSON path.

    Returns:
        Parsed catalog object, or ``None`` when the dataset has no commits.

    Raises:
        FetchKeepStoreError: If the catalog exists but is invalid.
    """
    if not catalog_path.exists():
        return None
    catalog = _read_json_object(catalog_path, "dataset catalog")
    if not isinstance(catalog.get("head"), str):
        raise FetchKeepStoreError(
            f"Failed to parse dataset catalog at {catalog_path}: "
            "missing string field 'head'. Recreate the catalog."
        )
    return catalog


def _read_json_object(path: Path, label: str) -> dict[str, Any]:
    """Read a JSON file whose top level must be an object.

    Raises:
        FetchKeepStoreError: If the file is missing, unreadable, or invalid.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise FetchKeepStoreError(
            f"Missing {label} at {path}. The dataset history is incomplete."
        ) from error
    except OSError as error:
        raise FetchKeepStoreError(f"Failed to read {label} at {path}: {error}.") from error
    except json.JSONDecodeError as error:
        raise FetchKeepStoreError(
            f"Failed to parse {label} at {path}: {error.msg}. "
            "Restore the file from a backup or recreate the dataset."
        ) from error
    if not isinstance(payload, dict):
        raise FetchKeepStoreError(
            f"Failed to parse {label} at {path}: expected JSON object at top level."
        )
    return payload
