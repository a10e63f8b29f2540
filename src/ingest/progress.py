"""Structured read progress reporting.

This module emits periodic progress events while a source is streamed,
including byte counts, completion percentage when the size is known,
and a final summary with elapsed time.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


@dataclass
class ReadProgressTracker:
    """Track bytes read from one source and log progress events."""

    source: str
    total_bytes: int | None
    interval_bytes: int
    bytes_read: int = 0
    started_at: float = field(default_factory=time.monotonic)
    _last_logged_at_bytes: int = 0

    def advance(self, chunk_size: int) -> None:
        """Record one chunk and log when the interval has been crossed."""
        self.bytes_read += chunk_size
        if self.bytes_read - self._last_logged_at_bytes < self.interval_bytes:
            return
        self._last_logged_at_bytes = self.bytes_read
        _LOGGER.info(
            "fetch_progress",
            source=self.source,
            bytes_read=self.bytes_read,
            total_bytes=self.total_bytes,
            percent=_percent(self.bytes_read, self.total_bytes),
        )

    def finish(self) -> None:
        """Log the completed read with elapsed time."""
        _LOGGER.info(
            "fetch_read_completed",
            source=self.source,
            bytes_read=self.bytes_read,
            total_bytes=self.total_bytes,
            elapsed_seconds=round(time.monotonic() - self.started_at, 3),
        )


def _percent(bytes_read: int, total_bytes: int | None) -> float | None:
    """Return completion percentage, or ``None`` when the total is unknown."""
    if not total_bytes:
        return None
    return round(min(bytes_read / total_bytes, 1.0) * 100, 1)
