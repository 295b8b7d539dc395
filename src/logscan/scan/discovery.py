"""Directory enumeration, log file naming, and address extraction."""

from __future__ import annotations

import os

LOG_FILE_TEMPLATE = "./{dir_name}access{index}.log"


class DirectoryOpenError(OSError):
    """Raised when the target directory cannot be opened for enumeration."""


def count_regular_files(dir_name: str) -> int:
    """Count regular files directly under ``dir_name``.

    Symlinks, directories, and special files are not counted.
    """
    try:
        with os.scandir(dir_name) as entries:
            return sum(1 for entry in entries if entry.is_file(follow_symlinks=False))
    except OSError as exc:
        raise DirectoryOpenError(
            exc.errno, f"cannot open directory ({dir_name})", dir_name
        ) from exc


def log_file_path(dir_name: str, index: int) -> str:
    """Return the expected path of log file ``index`` under ``dir_name``.

    No separator is inserted between ``dir_name`` and the file name; callers
    pass a trailing separator when one is needed.
    """
    return LOG_FILE_TEMPLATE.format(dir_name=dir_name, index=index)


def extract_address(line: str) -> str | None:
    """Return the first whitespace-delimited token of a line, if any."""
    tokens = line.split(maxsplit=1)
    if not tokens:
        return None
    return tokens[0]
