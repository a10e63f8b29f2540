"""Commit metadata construction.

Metadata always carries ``date``; ``file``, ``url``, and ``etag`` are added
only when the origin and response provide them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import assert_never

from core.types import CommitMetadata, FileOrigin, Origin, StdinOrigin, UrlOrigin


def build_commit_metadata(
    origin: Origin,
    fetched_at: datetime,
    new_token: str | None = None,
) -> CommitMetadata:
    """Build provenance metadata for one commit.

    Args:
        origin: Where the content came from.
        fetched_at: Time the fetch started; naive values are taken as UTC.
        new_token: ``ETag`` returned with URL content, if any.

    Returns:
        Metadata with exactly the fields this origin supports.
    """
    date = fetched_at if fetched_at.tzinfo else fetched_at.replace(tzinfo=timezone.utc)
    if isinstance(origin, StdinOrigin):
        return CommitMetadata(date=date)
    if isinstance(origin, FileOrigin):
        return CommitMetadata(date=date, file=origin.path)
    if isinstance(origin, UrlOrigin):
        return CommitMetadata(date=date, url=origin.address, etag=new_token or None)
    assert_never(origin)
