"""fetchkeep exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each failure kind maps to one error type so callers can report it.
"""

from __future__ import annotations


class FetchKeepError(Exception):
    """Base exception for all fetchkeep failures."""


class FetchKeepConfigError(FetchKeepError):
    """Raised for invalid runtime configuration or invocation arguments."""


class FetchKeepIOError(FetchKeepError):
    """Raised when a local file or standard input cannot be read."""


class FetchKeepNetworkError(FetchKeepError):
    """Raised when a URL cannot be reached at the connection level."""


class FetchKeepHTTPError(FetchKeepError):
    """Raised when a URL answers with an unusable HTTP status."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class FetchKeepStoreError(FetchKeepError):
    """Raised for dataset store and versioning failures."""
