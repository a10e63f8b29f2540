"""Unit tests for read progress reporting helpers."""

from __future__ import annotations

from ingest.progress import ReadProgressTracker


class _FakeLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, object]]] = []

    def info(self, event: str, **fields: object) -> None:
        self.events.append((event, fields))


def test_progress_tracker_logs_once_per_interval(monkeypatch) -> None:
    """Tracker should emit progress only after each interval is crossed."""
    fake_logger = _FakeLogger()
    monkeypatch.setattr("ingest.progress._LOGGER", fake_logger)
    tracker = ReadProgressTracker(source="stdin", total_bytes=None, interval_bytes=10)

    for _ in range(7):
        tracker.advance(4)
    tracker.finish()

    events = [event for event, _ in fake_logger.events]

    assert events == ["fetch_progress", "fetch_progress", "fetch_read_completed"]


def test_progress_tracker_reports_percent_when_total_known(monkeypatch) -> None:
    """Tracker should include completion percent for sized sources."""
    fake_logger = _FakeLogger()
    monkeypatch.setattr("ingest.progress._LOGGER", fake_logger)
    tracker = ReadProgressTracker(source="file.bin", total_bytes=8, interval_bytes=4)

    tracker.advance(4)

    assert fake_logger.events[0][1]["percent"] == 50.0
