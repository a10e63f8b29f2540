"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import FetchKeepConfig
from core.errors import FetchKeepConfigError


def test_from_env_reads_data_root(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve data root from environment."""
    monkeypatch.setenv("FETCHKEEP_DATA_ROOT", "./.tmp-fetchkeep")

    config = FetchKeepConfig.from_env()

    assert config.data_root.name == ".tmp-fetchkeep"


def test_from_env_leaves_timeout_unset_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without FETCHKEEP_HTTP_TIMEOUT the HTTP client default applies."""
    monkeypatch.delenv("FETCHKEEP_HTTP_TIMEOUT", raising=False)

    config = FetchKeepConfig.from_env()

    assert config.http_timeout_seconds is None


def test_from_env_parses_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should parse a positive timeout in seconds."""
    monkeypatch.setenv("FETCHKEEP_HTTP_TIMEOUT", "2.5")

    config = FetchKeepConfig.from_env()

    assert config.http_timeout_seconds == 2.5


def test_from_env_raises_for_negative_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject non-positive timeouts."""
    monkeypatch.setenv("FETCHKEEP_HTTP_TIMEOUT", "-1")

    with pytest.raises(FetchKeepConfigError):
        FetchKeepConfig.from_env()

    assert os.getenv("FETCHKEEP_HTTP_TIMEOUT") == "-1"


def test_from_env_raises_for_invalid_chunk_size(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric chunk sizes."""
    monkeypatch.setenv("FETCHKEEP_READ_CHUNK_SIZE", "not-a-number")

    with pytest.raises(FetchKeepConfigError):
        FetchKeepConfig.from_env()

    assert os.getenv("FETCHKEEP_READ_CHUNK_SIZE") == "not-a-number"
