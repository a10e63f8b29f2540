"""Unit tests for change detection."""

from __future__ import annotations

import pytest

from core.errors import FetchKeepHTTPError
from core.types import FileOrigin, StdinOrigin, UrlOrigin
from ingest.change_detector import Changed, Unchanged, detect_change
from ingest.source_reader import SourceFetch

_URL = UrlOrigin(address="http://example.test/resource")


def test_detect_change_always_changed_for_local_origins() -> None:
    """Stdin and file reads should bypass caching."""
    fetch = SourceFetch(status_code=None, body=b"abcdef")

    results = [detect_change(origin, fetch, None) for origin in (StdinOrigin(), FileOrigin("p"))]

    assert results == [Changed(body=b"abcdef"), Changed(body=b"abcdef")]


def test_detect_change_unchanged_for_conditional_not_modified() -> None:
    """A 304 answer to a conditional request should be unchanged."""
    fetch = SourceFetch(status_code=304, body=b"ignored", etag="xyz123")

    assert detect_change(_URL, fetch, "xyz123") == Unchanged()


def test_detect_change_changed_when_server_sends_new_content() -> None:
    """A 200 answer should be changed even when a token was sent."""
    fetch = SourceFetch(status_code=200, body=b"abcdefg", etag="v2")

    assert detect_change(_URL, fetch, "xyz123") == Changed(body=b"abcdefg", new_token="v2")


def test_detect_change_changed_without_etag() -> None:
    """URL content without an ETag should carry no new token."""
    fetch = SourceFetch(status_code=200, body=b"abcdef")

    assert detect_change(_URL, fetch, None) == Changed(body=b"abcdef", new_token=None)


def test_detect_change_rejects_unsolicited_not_modified() -> None:
    """A 304 without a sent token has nothing to compare against."""
    fetch = SourceFetch(status_code=304, body=b"")

    with pytest.raises(FetchKeepHTTPError):
        detect_change(_URL, fetch, None)
