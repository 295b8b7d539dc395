from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from logscan.logging import ScanEventLog, make_event


def test_event_log_writes_jsonl_schema(tmp_path: Path) -> None:
    with ScanEventLog(path=tmp_path / "nested" / "scan.jsonl") as log:
        log.record(make_event("file_missing", worker=1, path="./logs/access2.log", index=2))

    lines = (tmp_path / "nested" / "scan.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])

    assert set(event.keys()) == {"kind", "metadata", "timestamp", "worker"}
    assert event["kind"] == "file_missing"
    assert event["worker"] == 1
    assert event["metadata"] == {"index": 2, "path": "./logs/access2.log"}
    assert event["timestamp"].endswith("Z")


def test_unknown_event_kind_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown scan event kind"):
        make_event("file_exploded")


def test_concurrent_writers_never_interleave_lines(tmp_path: Path) -> None:
    with ScanEventLog(path=tmp_path / "scan.jsonl") as log:

        def write(worker: int) -> None:
            for index in range(50):
                log.record(make_event("file_scanned", worker=worker, index=index, lines=index))

        threads = [threading.Thread(target=write, args=(worker,)) for worker in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        records = log.read(limit=1000)

    assert len(records) == 400
    assert {record["worker"] for record in records} == set(range(8))


def test_file_sink_does_not_retain_events_in_memory(tmp_path: Path) -> None:
    with ScanEventLog(path=tmp_path / "scan.jsonl") as log:
        log.record(make_event("scan_started", total_files=1, workers=1))

        assert log.events() == []
        assert [record["kind"] for record in log.read()] == ["scan_started"]


def test_record_after_close_raises(tmp_path: Path) -> None:
    log = ScanEventLog(path=tmp_path / "scan.jsonl")
    log.close()
    log.close()

    with pytest.raises(ValueError, match="closed"):
        log.record(make_event("scan_started", total_files=0, workers=1))


def test_read_filters_by_kind_and_skips_malformed_lines(tmp_path: Path) -> None:
    path = tmp_path / "scan.jsonl"
    with ScanEventLog(path=path) as log:
        log.record(make_event("scan_started", total_files=2, workers=1))
        with path.open("a", encoding="utf-8") as handle:
            handle.write("{broken\n\n")
        log.record(make_event("scan_finished", distinct_count=5))

    assert [record["kind"] for record in log.read()] == ["scan_started", "scan_finished"]
    assert log.read(kind="scan_finished")[0]["metadata"] == {"distinct_count": 5}
    assert [record["kind"] for record in log.read(limit=1)] == ["scan_finished"]
    assert log.read(limit=0) == []


def test_in_memory_log_has_no_file() -> None:
    log = ScanEventLog()
    log.record(make_event("scan_started", total_files=0, workers=1))

    assert log.path is None
    assert log.read() == []
    assert [event.kind for event in log.events()] == ["scan_started"]
