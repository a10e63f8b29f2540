"""Shared typed models.

This module defines immutable data models used by ingest, store,
SDK, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal, Mapping, Union

from core.constants import (
    HASH_ALGORITHM,
    META_FIELD_DATE,
    META_FIELD_ETAG,
    META_FIELD_FILE,
    META_FIELD_URL,
)

FetchStatus = Literal["committed", "unchanged", "written"]


@dataclass(frozen=True)
class StdinOrigin:
    """Content read from the process standard input stream."""


@dataclass(frozen=True)
class FileOrigin:
    """Content read from a local file.

    Attributes:
        path: Source path exactly as given by the caller.
    """

    path: str


@dataclass(frozen=True)
class UrlOrigin:
    """Content fetched from an HTTP(S) URL.

    Attributes:
        address: Source URL exactly as given by the caller.
    """

    address: str


Origin = Union[StdinOrigin, FileOrigin, UrlOrigin]


@dataclass(frozen=True)
class ContentBlob:
    """Immutable fetched content, identified by its digest."""

    data: bytes

    @property
    def content_hash(self) -> str:
        """Return the hex digest that addresses this blob."""
        return hashlib.new(HASH_ALGORITHM, self.data).hexdigest()

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class CommitMetadata:
    """Provenance record attached to each commit.

    Optional fields are ``None`` when absent and never stored as empty
    values, so the serialized field count depends on the origin.

    Attributes:
        date: UTC timestamp of the fetch attempt.
        file: Source path for file origins.
        url: Source address for URL origins.
        etag: Cache token returned by the server for URL origins.
    """

    date: datetime
    file: str | None = None
    url: str | None = None
    etag: str | None = None

    def fields(self) -> dict[str, str]:
        """Return present metadata fields as a JSON-safe mapping."""
        payload = {META_FIELD_DATE: self.date.isoformat()}
        if self.file is not None:
            payload[META_FIELD_FILE] = self.file
        if self.url is not None:
            payload[META_FIELD_URL] = self.url
        if self.etag is not None:
            payload[META_FIELD_ETAG] = self.etag
        return payload

    @classmethod
    def from_fields(cls, payload: Mapping[str, object]) -> "CommitMetadata":
        """Rebuild metadata from a serialized field mapping.

        Args:
            payload: Mapping produced by :meth:`fields`.

        Returns:
            Metadata with absent keys left as ``None``.
        """
        date = datetime.fromisoformat(str(payload[META_FIELD_DATE]))
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return cls(
            date=date,
            file=_optional_str(payload, META_FIELD_FILE),
            url=_optional_str(payload, META_FIELD_URL),
            etag=_optional_str(payload, META_FIELD_ETAG),
        )


@dataclass(frozen=True)
class CommitRecord:
    """Persisted commit in a dataset chain.

    Attributes:
        commit_id: Digest of the canonical commit payload.
        dataset_name: Dataset the commit belongs to.
        height: Chain height, 1 for the root commit.
        parent_id: Previous head commit id, ``None`` for the root.
        value_hash: Content hash of the committed blob.
        meta: Provenance metadata.
    """

    commit_id: str
    dataset_name: str
    height: int
    parent_id: str | None
    value_hash: str
    meta: CommitMetadata


@dataclass(frozen=True)
class FetchOptions:
    """Fetch command options.

    Attributes:
        destination: Dataset locator, ``<store-path>::<dataset>`` or ``<dataset>``.
        source: File path or URL; ignored when reading stdin.
        use_stdin: Read content from standard input.
        commit: Commit the content; when ``False`` only the blob is written.
    """

    destination: str
    source: str | None = None
    use_stdin: bool = False
    commit: bool = True


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one fetch invocation.

    Attributes:
        status: ``committed``, ``unchanged``, or ``written`` (blob only).
        dataset_name: Target dataset name.
        height: Dataset height after the invocation, 0 when empty.
        value_hash: Content hash of fetched bytes, ``None`` when unchanged.
        commit_id: New head commit id, ``None`` unless committed.
    """

    status: FetchStatus
    dataset_name: str
    height: int
    value_hash: str | None = None
    commit_id: str | None = None


def _optional_str(payload: Mapping[str, object], key: str) -> str | None:
    """Read an optional string field from a metadata mapping."""
    value = payload.get(key)
    if value is None:
        return None
    return str(value)
