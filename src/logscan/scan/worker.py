"""File worker: scans one fixed range of numbered log files."""

from __future__ import annotations

import threading

from logscan.config import DEFAULT_ENCODING
from logscan.logging import ScanEventLog, make_event
from logscan.scan.address_set import AddressSet
from logscan.scan.discovery import extract_address, log_file_path
from logscan.scan.models import FileRange, FileScanResult, WorkerReport


class FileWorker:
    """Sequential scan of a worker's file range into a shared AddressSet.

    A file that cannot be opened or read is recorded and skipped; nothing
    here aborts the scan of the remaining range.
    """

    def __init__(
        self,
        worker_index: int,
        file_range: FileRange,
        dir_name: str,
        addresses: AddressSet,
        events: ScanEventLog | None = None,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self.worker_index = worker_index
        self.file_range = file_range
        self._dir_name = dir_name
        self._addresses = addresses
        self._events = events
        self._encoding = encoding

    def run(self) -> WorkerReport:
        """Scan every index in the range and return per-worker totals."""
        self._emit(
            "worker_started",
            start=self.file_range.start,
            end=self.file_range.end,
        )
        files: list[FileScanResult] = []
        new_addresses = 0
        for index in self.file_range.indices():
            result, added = self.scan_file(index)
            files.append(result)
            new_addresses += added
        report = WorkerReport(
            worker_index=self.worker_index,
            file_range=self.file_range,
            files=tuple(files),
            lines_read=sum(item.lines for item in files),
            new_addresses=new_addresses,
        )
        self._emit(
            "worker_finished",
            files_scanned=report.files_scanned,
            files_missing=report.files_missing,
            lines_read=report.lines_read,
            new_addresses=report.new_addresses,
        )
        return report

    def scan_file(self, index: int) -> tuple[FileScanResult, int]:
        """Scan one file; return its result and the number of new addresses."""
        path = log_file_path(self._dir_name, index)
        lines = 0
        added = 0
        try:
            handle = open(path, encoding=self._encoding, errors="surrogateescape")
        except OSError as exc:
            status = "missing" if isinstance(exc, FileNotFoundError) else "unreadable"
            self._emit("file_missing", path=path, index=index, reason=_reason(exc))
            return FileScanResult(index=index, path=path, status=status, lines=0), 0
        try:
            with handle:
                for line in handle:
                    lines += 1
                    address = extract_address(line)
                    if address is None:
                        continue
                    if self._addresses.insert_if_absent(address):
                        added += 1
        except OSError as exc:
            self._emit("file_missing", path=path, index=index, reason=_reason(exc))
            return FileScanResult(index=index, path=path, status="unreadable", lines=lines), added
        self._emit("file_scanned", path=path, index=index, lines=lines)
        return FileScanResult(index=index, path=path, status="scanned", lines=lines), added

    def _emit(self, kind: str, **metadata: object) -> None:
        if self._events is None:
            return
        self._events.record(make_event(kind, worker=self.worker_index, **metadata))


class WorkerThread(threading.Thread):
    """Thread handle owning one FileWorker until joined."""

    def __init__(self, worker: FileWorker) -> None:
        super().__init__(name=f"{type(worker).__name__}{worker.worker_index}")
        self.worker = worker
        self.report: WorkerReport | None = None
        self.error: BaseException | None = None

    def run(self) -> None:
        try:
            self.report = self.worker.run()
        except Exception as exc:
            self.error = exc


def _reason(exc: OSError) -> str:
    return exc.strerror or exc.__class__.__name__
