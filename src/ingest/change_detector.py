"""Change detection for conditional fetches.

This module classifies a completed read as changed or unchanged.
Only URL origins can be unchanged: a ``304 Not Modified`` answer to a
request that carried the previous ``ETag`` means the dataset head is current.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from core.constants import HTTP_NOT_MODIFIED
from core.errors import FetchKeepHTTPError
from core.types import Origin, UrlOrigin
from ingest.source_reader import SourceFetch


@dataclass(frozen=True)
class Unchanged:
    """The server confirmed the previously committed content is current."""


@dataclass(frozen=True)
class Changed:
    """New content was obtained.

    Attributes:
        body: Fetched bytes.
        new_token: Cache token to store with the commit, if the server sent one.
    """

    body: bytes
    new_token: str | None = None


ChangeResult = Union[Unchanged, Changed]


def detect_change(origin: Origin, fetch: SourceFetch, sent_token: str | None) -> ChangeResult:
    """Classify a read result.

    Args:
        origin: Origin the content was read from.
        fetch: Raw read result.
        sent_token: Cache token sent as ``If-None-Match``, if any.

    Returns:
        ``Unchanged`` for a conditional 304, else ``Changed``.

    Raises:
        FetchKeepHTTPError: If a 304 arrives for an unconditional request.
    """
    if not isinstance(origin, UrlOrigin):
        return Changed(body=fetch.body)
    if fetch.status_code != HTTP_NOT_MODIFIED:
        return Changed(body=fetch.body, new_token=fetch.etag)
    if not sent_token:
        raise FetchKeepHTTPError(
            f"Error downloading {origin.address}: HTTP 304 Not Modified returned "
            "for a request without If-None-Match; there is no cached content to reuse.",
            status_code=HTTP_NOT_MODIFIED,
            url=origin.address,
        )
    return Unchanged()
