"""Command-line entrypoint: count distinct addresses across numbered logs."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TextIO

from logscan.config import CliOverrides, ScanConfig, load_effective_config
from logscan.logging import ScanEventLog
from logscan.scan import (
    ScanResult,
    WorkerFailedError,
    WorkerLaunchError,
    run_scan,
    validate_worker_count,
)


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for scan startup configuration."""
    parser = argparse.ArgumentParser(
        prog="logscan",
        description="Count distinct addresses in <directory>access<N>.log files.",
    )
    parser.add_argument("directory", help="Directory prefix, including a trailing separator.")
    parser.add_argument("thread_count", type=int, help="Number of worker threads (> 0).")
    parser.add_argument("--encoding", required=False, default=None)
    parser.add_argument("--max-workers", type=int, required=False, default=None)
    parser.add_argument(
        "--clamp-workers",
        action="store_true",
        default=None,
        help="Launch no more workers than there are files.",
    )
    parser.add_argument(
        "--audit-log",
        required=False,
        default=None,
        help="Write scan events as JSONL to this path.",
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON summary.")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the logscan process."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(
        encoding=args.encoding,
        clamp_workers=args.clamp_workers,
        max_workers=args.max_workers,
        audit_path=Path(args.audit_log) if args.audit_log is not None else None,
    )
    try:
        config = load_effective_config(Path.cwd(), overrides=overrides)
        validate_worker_count(args.thread_count, config.scan.max_workers)
        if args.verbose:
            _print_header(args.directory, args.thread_count, config, sys.stderr)
        audit_path = config.audit.path if config.audit.enabled else None
        with ScanEventLog(path=audit_path) as events:
            result = run_scan(args.directory, args.thread_count, config=config, events=events)
    except (ValueError, OSError, WorkerLaunchError, WorkerFailedError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _print_skipped_files(result, sys.stderr)
    if args.verbose:
        _print_workers(result, sys.stderr)
    if args.json:
        print(json.dumps(result.to_public_dict(), sort_keys=True))
    else:
        print(result.distinct_count)
    return 0


def _print_header(directory: str, thread_count: int, config: ScanConfig, stream: TextIO) -> None:
    stream.write(f"Directory with files to be parsed is: {directory}\n")
    stream.write(f"Number of threads: {thread_count}\n")
    if config.scan.clamp_workers:
        stream.write("Worker count is clamped to the number of files.\n")
    if config.audit.enabled:
        stream.write(f"Scan events are written to {config.audit.path}\n")


def _print_skipped_files(result: ScanResult, stream: TextIO) -> None:
    for report in result.workers:
        for item in report.files:
            if item.status == "missing":
                stream.write(f"Error: Not found file {item.path}\n")
            elif item.status == "unreadable":
                stream.write(f"Error: Cannot read file {item.path}\n")


def _print_workers(result: ScanResult, stream: TextIO) -> None:
    stream.write(f"Number of files that have to be read is {result.total_files}\n")
    for report in result.workers:
        file_range = report.file_range
        stream.write(
            f"Worker {report.worker_index + 1}: files {file_range.start}-{file_range.end}, "
            f"scanned {report.files_scanned}, missing {report.files_missing}, "
            f"lines {report.lines_read}, new addresses {report.new_addresses}\n"
        )
    stream.write(f"Total number of distinct addresses is {result.distinct_count}\n")


if __name__ == "__main__":
    raise SystemExit(main())
