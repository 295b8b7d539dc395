"""Typed models for scan state."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class FileRange:
    """Inclusive file-index range assigned to one worker."""

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        """Return True when the range contains no indices."""
        return self.start > self.end

    def indices(self) -> range:
        """Return the file indices covered by this range."""
        return range(self.start, self.end + 1)

    def __len__(self) -> int:
        return max(0, self.end - self.start + 1)


@dataclass(slots=True, frozen=True)
class FileScanResult:
    """Outcome of scanning one indexed log file."""

    index: int
    path: str
    status: str
    lines: int


@dataclass(slots=True, frozen=True)
class WorkerReport:
    """Per-worker totals gathered after the worker finished."""

    worker_index: int
    file_range: FileRange
    files: tuple[FileScanResult, ...]
    lines_read: int
    new_addresses: int

    @property
    def files_scanned(self) -> int:
        return sum(1 for item in self.files if item.status == "scanned")

    @property
    def files_missing(self) -> int:
        return sum(1 for item in self.files if item.status != "scanned")


@dataclass(slots=True, frozen=True)
class ScanResult:
    """Final scan outcome returned by the coordinator."""

    distinct_count: int
    total_files: int
    requested_workers: int
    workers: tuple[WorkerReport, ...]

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable summary for CLI output."""
        return {
            "distinct_count": self.distinct_count,
            "total_files": self.total_files,
            "requested_workers": self.requested_workers,
            "launched_workers": len(self.workers),
            "workers": [
                {
                    "worker": report.worker_index,
                    "range": [report.file_range.start, report.file_range.end],
                    "files_scanned": report.files_scanned,
                    "files_missing": report.files_missing,
                    "lines_read": report.lines_read,
                    "new_addresses": report.new_addresses,
                }
                for report in self.workers
            ],
        }
