"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def http_server() -> Iterator[Callable[..., object]]:
    """Start local HTTP servers for a test and stop them afterwards."""
    from tests.local_http_server import LocalHTTPServer

    servers: list[LocalHTTPServer] = []

    def _start(responder):
        server = LocalHTTPServer(responder).start()
        servers.append(server)
        return server

    yield _start
    for server in servers:
        server.stop()
