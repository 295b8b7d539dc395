"""Structured JSONL scan event log."""

from __future__ import annotations

import json
import threading
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

EVENT_KINDS = (
    "scan_started",
    "worker_started",
    "file_missing",
    "file_scanned",
    "worker_finished",
    "scan_finished",
)


@dataclass(slots=True, frozen=True)
class ScanEvent:
    """Single scan progress event."""

    timestamp: str
    kind: str
    worker: int | None
    metadata: dict[str, object]


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_event(kind: str, worker: int | None = None, **metadata: object) -> ScanEvent:
    """Build a timestamped event of a known kind."""
    if kind not in EVENT_KINDS:
        raise ValueError(f"Unknown scan event kind: {kind}")
    return ScanEvent(timestamp=utc_timestamp(), kind=kind, worker=worker, metadata=dict(metadata))


class ScanEventLog:
    """Thread-safe event recorder.

    Without a path, events are kept in memory for inspection. With a path,
    they are appended to one JSONL handle held open until `close` and
    are not retained in memory.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._events: list[ScanEvent] = []
        self._handle: TextIO | None = None
        if self._path is not None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = self._path.open("a", encoding="utf-8")

    def __enter__(self) -> ScanEventLog:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def path(self) -> Path | None:
        """Return on-disk JSONL path, if any."""
        return self._path

    def record(self, event: ScanEvent) -> None:
        """Append one event, as a JSON line when a sink is open."""
        if self._path is None:
            with self._lock:
                self._events.append(event)
            return
        line = json.dumps(asdict(event), sort_keys=True) + "\n"
        with self._lock:
            if self._handle is None:
                raise ValueError("Scan event log is closed.")
            self._handle.write(line)
            self._handle.flush()

    def close(self) -> None:
        """Close the JSONL sink; later records raise ValueError."""
        with self._lock:
            if self._handle is not None:
                self._handle.close()
                self._handle = None

    def events(self, kind: str | None = None) -> list[ScanEvent]:
        """Return recorded events in arrival order, optionally filtered by kind."""
        with self._lock:
            snapshot = list(self._events)
        if kind is None:
            return snapshot
        return [event for event in snapshot if event.kind == kind]

    def read(self, kind: str | None = None, limit: int = 50) -> list[dict[str, object]]:
        """Read recent events back from disk, optionally filtered by kind."""
        if limit < 1 or self._path is None:
            return []
        entries: list[dict[str, object]] = []
        if not self._path.exists():
            return entries
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                stripped = line.strip()
                if not stripped:
                    continue
                try:
                    record = json.loads(stripped)
                except json.JSONDecodeError:
                    continue
                if kind is not None and record.get("kind") != kind:
                    continue
                entries.append(record)
        if len(entries) <= limit:
            return entries
        return entries[-limit:]
