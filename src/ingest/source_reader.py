"""Source readers for fetch invocations.

This module reads raw bytes from standard input, local files, or HTTP(S)
URLs. URL reads send the previous cache token as ``If-None-Match`` and
surface the response status and ``ETag`` for change detection.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, assert_never

import requests

from core.config import FetchKeepConfig
from core.constants import ETAG_HEADER, HTTP_NOT_MODIFIED, IF_NONE_MATCH_HEADER
from core.errors import FetchKeepHTTPError, FetchKeepIOError, FetchKeepNetworkError
from core.types import FileOrigin, Origin, StdinOrigin, UrlOrigin
from ingest.progress import ReadProgressTracker


@dataclass(frozen=True)
class SourceFetch:
    """Raw result of reading one source.

    Attributes:
        status_code: HTTP status for URL origins, ``None`` otherwise.
        body: Fully read content; empty for ``304 Not Modified``.
        etag: ``ETag`` response header when present and non-empty.
    """

    status_code: int | None
    body: bytes
    etag: str | None = None


def read_source(
    origin: Origin,
    cache_token: str | None,
    config: FetchKeepConfig,
    stdin: BinaryIO | None = None,
) -> SourceFetch:
    """Read all bytes for an origin.

    Args:
        origin: Where to read from.
        cache_token: Previous ``ETag`` for conditional URL requests.
        config: Runtime configuration for chunking and timeouts.
        stdin: Binary stream used for stdin origins; process stdin by default.

    Returns:
        Read status, body, and cache token.

    Raises:
        FetchKeepIOError: If stdin or a local file cannot be read.
        FetchKeepNetworkError: If a URL cannot be reached.
        FetchKeepHTTPError: If a URL answers with a non-2xx, non-304 status.
    """
    if isinstance(origin, StdinOrigin):
        stream = stdin if stdin is not None else _process_stdin()
        return SourceFetch(status_code=None, body=_read_stdin(stream, config))
    if isinstance(origin, FileOrigin):
        return SourceFetch(status_code=None, body=_read_file(origin.path, config))
    if isinstance(origin, UrlOrigin):
        return _read_url(origin.address, cache_token, config)
    assert_never(origin)


def _read_stdin(stream: BinaryIO, config: FetchKeepConfig) -> bytes:
    """Read standard input until end of stream.

    Raises:
        FetchKeepIOError: If the stream read fails.
    """
    tracker = ReadProgressTracker("stdin", None, config.progress_interval_bytes)
    try:
        chunks = iter(lambda: stream.read(config.read_chunk_size), b"")
        return _collect_chunks(chunks, tracker)
    except (OSError, ValueError) as error:
        raise FetchKeepIOError(
            f"Failed to read standard input: {error}. "
            "Check the producing process and retry."
        ) from error


def _process_stdin() -> BinaryIO:
    """Return the binary view of process stdin.

    Raises:
        FetchKeepIOError: If the process has no usable standard input.
    """
    if sys.stdin is None or not hasattr(sys.stdin, "buffer"):
        raise FetchKeepIOError(
            "Failed to read standard input: the process has no open stdin. "
            "Pipe data into the command or pass a file or URL instead."
        )
    return sys.stdin.buffer


def _read_file(path: str, config: FetchKeepConfig) -> bytes:
    """Read a whole local file.

    Raises:
        FetchKeepIOError: If the path is missing, not a file, or unreadable.
    """
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise FetchKeepIOError(
            f"Failed to read source at {path}: path does not exist or is not a file. "
            "Provide an existing file, an http(s) URL, or --stdin."
        )
    try:
        tracker = ReadProgressTracker(path, file_path.stat().st_size, config.progress_interval_bytes)
        with file_path.open("rb") as handle:
            chunks = iter(lambda: handle.read(config.read_chunk_size), b"")
            return _collect_chunks(chunks, tracker)
    except OSError as error:
        raise FetchKeepIOError(
            f"Failed to read source at {path}: {error}. Check file permissions."
        ) from error


def _read_url(address: str, cache_token: str | None, config: FetchKeepConfig) -> SourceFetch:
    """Issue a GET request, conditional when a cache token is known.

    Raises:
        FetchKeepNetworkError: If the connection or body transfer fails.
        FetchKeepHTTPError: If the status is neither 2xx nor 304.
    """
    headers = {IF_NONE_MATCH_HEADER: cache_token} if cache_token else {}
    try:
        response = requests.get(
            address,
            headers=headers,
            timeout=config.http_timeout_seconds,
            stream=True,
        )
    except requests.RequestException as error:
        raise FetchKeepNetworkError(
            f"Failed to reach {address}: {error}. Check the URL and network access."
        ) from error
    with response:
        etag = response.headers.get(ETAG_HEADER) or None
        if response.status_code == HTTP_NOT_MODIFIED:
            return SourceFetch(status_code=HTTP_NOT_MODIFIED, body=b"", etag=etag)
        if not 200 <= response.status_code < 300:
            raise FetchKeepHTTPError(
                f"Error downloading {address}: HTTP {response.status_code} "
                f"{response.reason}.",
                status_code=response.status_code,
                url=address,
            )
        tracker = ReadProgressTracker(
            address,
            _content_length(response),
            config.progress_interval_bytes,
        )
        try:
            body = _collect_chunks(response.iter_content(config.read_chunk_size), tracker)
        except requests.RequestException as error:
            raise FetchKeepNetworkError(
                f"Connection to {address} failed while reading the body: {error}."
            ) from error
    return SourceFetch(status_code=response.status_code, body=body, etag=etag)


def _collect_chunks(chunks: Iterable[bytes], tracker: ReadProgressTracker) -> bytes:
    """Join streamed chunks while reporting progress."""
    buffer = bytearray()
    for chunk in chunks:
        buffer.extend(chunk)
        tracker.advance(len(chunk))
    tracker.finish()
    return bytes(buffer)


def _content_length(response: requests.Response) -> int | None:
    """Return the declared body size when the server sent a valid one."""
    raw_length = response.headers.get("Content-Length")
    if raw_length is None or not raw_length.isdigit():
        return None
    return int(raw_length)
