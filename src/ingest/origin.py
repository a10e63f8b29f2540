"""Origin resolution for fetch invocations."""

from __future__ import annotations

from urllib.parse import urlsplit

from core.constants import URL_SCHEMES
from core.errors import FetchKeepConfigError
from core.types import FileOrigin, Origin, StdinOrigin, UrlOrigin


def resolve_origin(source: str | None, use_stdin: bool) -> Origin:
    """Determine where content should be read from.

    Args:
        source: File path or URL argument, if any.
        use_stdin: Whether the caller asked to read standard input.

    Returns:
        Stdin, file, or URL origin.

    Raises:
        FetchKeepConfigError: If the arguments are missing or conflicting.
    """
    if use_stdin:
        if source:
            raise FetchKeepConfigError(
                f"Cannot read both standard input and source '{source}'. "
                "Pass either --stdin or a source path/URL."
            )
        return StdinOrigin()
    if not source:
        raise FetchKeepConfigError(
            "No source given. Pass a file path, an http(s) URL, or --stdin."
        )
    if is_url(source):
        return UrlOrigin(address=source)
    return FileOrigin(path=source)


def is_url(source: str) -> bool:
    """Return whether ``source`` uses an HTTP(S) scheme."""
    return urlsplit(source).scheme.lower() in URL_SCHEMES
