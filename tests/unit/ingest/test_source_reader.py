"""Unit tests for source reader module."""

from __future__ import annotations

import io
import socket
from dataclasses import replace
from pathlib import Path

import pytest
import requests

from core.config import FetchKeepConfig
from core.errors import FetchKeepHTTPError, FetchKeepIOError, FetchKeepNetworkError
from core.types import FileOrigin, StdinOrigin, UrlOrigin
from ingest.source_reader import read_source


def _config(tmp_path: Path) -> FetchKeepConfig:
    return replace(FetchKeepConfig.from_env(), data_root=tmp_path, read_chunk_size=4)


def test_read_source_reads_stdin_to_end(tmp_path: Path) -> None:
    """Stdin reader should return every byte across chunk boundaries."""
    fetch = read_source(StdinOrigin(), None, _config(tmp_path), stdin=io.BytesIO(b"abcdef"))

    assert fetch.body == b"abcdef" and fetch.status_code is None


def test_read_source_accepts_empty_stdin(tmp_path: Path) -> None:
    """Empty standard input should be valid content."""
    fetch = read_source(StdinOrigin(), None, _config(tmp_path), stdin=io.BytesIO(b""))

    assert fetch.body == b""


def test_read_source_reads_file(tmp_path: Path) -> None:
    """File reader should return file bytes."""
    source_path = tmp_path / "source.bin"
    source_path.write_bytes(b"abcdef")

    fetch = read_source(FileOrigin(path=str(source_path)), None, _config(tmp_path))

    assert fetch.body == b"abcdef"


def test_read_source_raises_for_missing_file(tmp_path: Path) -> None:
    """Reader should fail when the source path is missing."""
    missing_path = tmp_path / "does-not-exist"

    with pytest.raises(FetchKeepIOError):
        read_source(FileOrigin(path=str(missing_path)), None, _config(tmp_path))

    assert missing_path.exists() is False


def test_read_source_raises_for_directory(tmp_path: Path) -> None:
    """Reader should refuse directories."""
    with pytest.raises(FetchKeepIOError):
        read_source(FileOrigin(path=str(tmp_path)), None, _config(tmp_path))


def test_read_source_returns_url_body_and_etag(tmp_path: Path, http_server) -> None:
    """URL reader should return body and ETag header."""
    server = http_server(lambda headers: (200, {"ETag": "xyz123"}, b"abcdef"))

    fetch = read_source(UrlOrigin(address=server.url), None, _config(tmp_path))

    assert (fetch.status_code, fetch.body, fetch.etag) == (200, b"abcdef", "xyz123")


def test_read_source_sends_no_conditional_header_without_token(
    tmp_path: Path, http_server
) -> None:
    """Requests without a cache token should not carry If-None-Match."""
    server = http_server(lambda headers: (200, {}, b"abcdef"))

    fetch = read_source(UrlOrigin(address=server.url), None, _config(tmp_path))

    assert fetch.etag is None and "If-None-Match" not in server.requests[0]


def test_read_source_sends_cache_token_as_if_none_match(tmp_path: Path, http_server) -> None:
    """A known cache token should be sent and a 304 returned without body."""
    server = http_server(lambda headers: (304, {"ETag": "xyz123"}, b""))

    fetch = read_source(UrlOrigin(address=server.url), "xyz123", _config(tmp_path))

    assert server.requests[0]["If-None-Match"] == "xyz123"
    assert fetch.status_code == 304 and fetch.body == b""


def test_read_source_raises_http_error_for_server_failure(tmp_path: Path, http_server) -> None:
    """Non-2xx, non-304 statuses should raise an HTTP error."""
    server = http_server(lambda headers: (503, {}, b"busy"))

    with pytest.raises(FetchKeepHTTPError) as error_info:
        read_source(UrlOrigin(address=server.url), None, _config(tmp_path))

    assert error_info.value.status_code == 503


def test_read_source_raises_network_error_when_unreachable(tmp_path: Path) -> None:
    """Connection failures should raise a network error."""
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]

    with pytest.raises(FetchKeepNetworkError):
        read_source(UrlOrigin(address=f"http://127.0.0.1:{port}/"), None, _config(tmp_path))


def test_read_source_raises_network_error_when_body_transfer_fails(
    tmp_path: Path, http_server, monkeypatch
) -> None:
    """A connection dropped mid-body should raise a network error."""
    server = http_server(lambda headers: (200, {}, b"abcdef"))

    def _dropping_iter_content(self, chunk_size=1, decode_unicode=False):
        yield b"abc"
        raise requests.exceptions.ChunkedEncodingError("connection dropped")

    monkeypatch.setattr(requests.Response, "iter_content", _dropping_iter_content)

    with pytest.raises(FetchKeepNetworkError):
        read_source(UrlOrigin(address=server.url), None, _config(tmp_path))


def test_read_source_raises_io_error_for_closed_stdin(tmp_path: Path) -> None:
    """A closed stdin stream should surface as an IO error."""
    stream = io.BytesIO(b"abcdef")
    stream.close()

    with pytest.raises(FetchKeepIOError):
        read_source(StdinOrigin(), None, _config(tmp_path), stdin=stream)


def test_read_source_raises_io_error_without_process_stdin(tmp_path: Path, monkeypatch) -> None:
    """A process started with stdin closed should fail with an IO error."""
    monkeypatch.setattr("sys.stdin", None)

    with pytest.raises(FetchKeepIOError):
        read_source(StdinOrigin(), None, _config(tmp_path))
