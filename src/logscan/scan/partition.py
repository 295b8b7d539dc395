"""Static partitioning of numbered files across a fixed worker count."""

from __future__ import annotations

from logscan.scan.models import FileRange


def compute_range(worker_index: int, total_workers: int, total_files: int) -> FileRange:
    """Return the inclusive file range for one worker.

    Every worker gets ``total_files // total_workers`` files; the last one also
    absorbs the remainder. With more workers than files, every worker but the
    last gets an empty range and the last covers ``[1, total_files]``.
    """
    if total_workers < 1:
        raise ValueError("total_workers must be a positive integer.")
    if worker_index < 0 or worker_index >= total_workers:
        raise ValueError(f"worker_index must be in [0, {total_workers - 1}].")
    if total_files < 0:
        raise ValueError("total_files must not be negative.")
    per_worker = total_files // total_workers
    start = worker_index * per_worker + 1
    if worker_index == total_workers - 1:
        return FileRange(start=start, end=total_files)
    return FileRange(start=start, end=(worker_index + 1) * per_worker)


def compute_ranges(total_workers: int, total_files: int) -> tuple[FileRange, ...]:
    """Return one range per worker, ordered by worker index."""
    return tuple(
        compute_range(index, total_workers, total_files) for index in range(total_workers)
    )


def effective_worker_count(total_workers: int, total_files: int, clamp: bool) -> int:
    """Return the number of workers to launch.

    Without ``clamp`` the requested count is used as-is. With ``clamp`` it is
    limited to the file count, but never below one worker.
    """
    if not clamp:
        return total_workers
    return max(1, min(total_workers, total_files))
