"""Launches one worker per file range, joins them all, reports the count."""

from __future__ import annotations

from logscan.config import DEFAULT_ENCODING, ScanConfig, ScanSettings
from logscan.logging import ScanEventLog, make_event
from logscan.scan.address_set import AddressSet
from logscan.scan.discovery import count_regular_files
from logscan.scan.models import ScanResult, WorkerReport
from logscan.scan.partition import compute_ranges, effective_worker_count
from logscan.scan.worker import FileWorker, WorkerThread


class ScanConfigError(ValueError):
    """Raised when the requested worker count is not usable."""


class WorkerLaunchError(RuntimeError):
    """Raised when a worker thread cannot be started."""


class WorkerFailedError(RuntimeError):
    """Raised when a worker died on an unrecoverable internal error."""

    def __init__(self, worker_index: int, cause: BaseException) -> None:
        super().__init__(f"Worker {worker_index} failed: {cause!r}")
        self.worker_index = worker_index
        self.cause = cause


class Coordinator:
    """Owns the shared AddressSet and every worker handle for one scan."""

    def __init__(
        self,
        dir_name: str,
        total_workers: int,
        total_files: int,
        events: ScanEventLog | None = None,
        encoding: str = DEFAULT_ENCODING,
        clamp_workers: bool = False,
    ) -> None:
        if total_workers < 1:
            raise ScanConfigError("The number of threads should be > 0.")
        self._dir_name = dir_name
        self._requested_workers = total_workers
        self._total_files = total_files
        self._events = events
        self._encoding = encoding
        self._clamp_workers = clamp_workers
        self._addresses = AddressSet()

    @property
    def addresses(self) -> AddressSet:
        return self._addresses

    def build_workers(self) -> list[FileWorker]:
        """Create one FileWorker per computed range."""
        launched = effective_worker_count(
            self._requested_workers, self._total_files, clamp=self._clamp_workers
        )
        ranges = compute_ranges(launched, self._total_files)
        return [
            FileWorker(
                worker_index=index,
                file_range=file_range,
                dir_name=self._dir_name,
                addresses=self._addresses,
                events=self._events,
                encoding=self._encoding,
            )
            for index, file_range in enumerate(ranges)
        ]

    def run(self) -> ScanResult:
        """Run all workers concurrently and return the final distinct count."""
        workers = self.build_workers()
        self._emit("scan_started", total_files=self._total_files, workers=len(workers))
        handles: list[WorkerThread] = []
        try:
            for worker in workers:
                handle = WorkerThread(worker)
                handle.start()
                handles.append(handle)
        except RuntimeError as exc:
            _join_all(handles)
            raise WorkerLaunchError(
                f"Could not start worker {len(handles)} of {len(workers)}: {exc}"
            ) from exc
        _join_all(handles)

        reports: list[WorkerReport] = []
        for handle in handles:
            if handle.error is not None:
                raise WorkerFailedError(handle.worker.worker_index, handle.error) from handle.error
            if handle.report is not None:
                reports.append(handle.report)

        distinct_count = self._addresses.distinct_count
        self._emit("scan_finished", distinct_count=distinct_count)
        return ScanResult(
            distinct_count=distinct_count,
            total_files=self._total_files,
            requested_workers=self._requested_workers,
            workers=tuple(reports),
        )

    def _emit(self, kind: str, **metadata: object) -> None:
        if self._events is None:
            return
        self._events.record(make_event(kind, **metadata))


def validate_worker_count(total_workers: int, max_workers: int | None = None) -> int:
    """Return the worker count when it is positive and within an optional cap."""
    if total_workers < 1:
        raise ScanConfigError("The number of threads should be > 0.")
    if max_workers is not None and total_workers > max_workers:
        raise ScanConfigError(f"The number of threads should be <= {max_workers}.")
    return total_workers


def run_scan(
    dir_name: str,
    total_workers: int,
    config: ScanConfig | None = None,
    events: ScanEventLog | None = None,
) -> ScanResult:
    """Count files in ``dir_name``, then scan them with ``total_workers`` threads."""
    settings = config.scan if config is not None else ScanSettings()
    validate_worker_count(total_workers, settings.max_workers)
    total_files = count_regular_files(dir_name)
    coordinator = Coordinator(
        dir_name=dir_name,
        total_workers=total_workers,
        total_files=total_files,
        events=events,
        encoding=settings.encoding,
        clamp_workers=settings.clamp_workers,
    )
    return coordinator.run()


def _join_all(handles: list[WorkerThread]) -> None:
    for handle in handles:
        handle.join()
