"""Concurrent log scanning package."""

from .address_set import AddressSet
from .coordinator import (
    Coordinator,
    ScanConfigError,
    WorkerFailedError,
    WorkerLaunchError,
    run_scan,
    validate_worker_count,
)
from .discovery import DirectoryOpenError, count_regular_files, extract_address, log_file_path
from .models import FileRange, FileScanResult, ScanResult, WorkerReport
from .partition import compute_range, compute_ranges, effective_worker_count
from .worker import FileWorker, WorkerThread

__all__ = [
    "AddressSet",
    "Coordinator",
    "DirectoryOpenError",
    "FileRange",
    "FileScanResult",
    "FileWorker",
    "ScanConfigError",
    "ScanResult",
    "WorkerFailedError",
    "WorkerLaunchError",
    "WorkerReport",
    "WorkerThread",
    "compute_range",
    "compute_ranges",
    "count_regular_files",
    "effective_worker_count",
    "extract_address",
    "log_file_path",
    "run_scan",
    "validate_worker_count",
]
