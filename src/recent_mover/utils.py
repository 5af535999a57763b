"""
Filesystem and formatting helpers.

This module provides:
- best_timestamp(): Creation time of a stat result, with documented fallbacks
- normalize_path(): Expand ~ and resolve paths to absolute form
- is_cross_device_error(): Detect rename failures caused by crossing filesystems
- format_size(): Human-readable file sizes (B, KB, MB, ...)
- format_time(): Local HH:MM rendering of a timestamp
"""

import errno
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def best_timestamp(stat_result: os.stat_result) -> float:
    """
    Return the best available creation time for a stat result.

    Fallback order:
    - st_birthtime where the platform reports it (macOS, BSD, Windows on 3.12+)
    - st_ctime on Windows, where it holds the creation time
    - st_mtime everywhere else (Linux does not expose birth time through os.stat)

    Args:
        stat_result: Result of os.stat() / Path.stat()

    Returns:
        POSIX timestamp in seconds
    """
    birthtime = getattr(stat_result, "st_birthtime", None)
    if birthtime is not None:
        return birthtime

    if sys.platform == "win32":
        return stat_result.st_ctime

    return stat_result.st_mtime


def normalize_path(path: Union[str, Path]) -> Path:
    """
    Expand a user-relative path and make it absolute.

    Unlike Path.resolve() this never fails on missing paths, so configured
    directories that do not exist yet can still be normalized and reported.

    Examples:
        >>> normalize_path("~/Downloads")  # doctest: +SKIP
        PosixPath('/home/me/Downloads')
    """
    expanded = os.path.expanduser(str(path))
    try:
        return Path(expanded).resolve()
    except (OSError, RuntimeError):
        return Path(os.path.abspath(os.path.normpath(expanded)))


def is_cross_device_error(error: OSError) -> bool:
    """
    Check whether an OSError means source and destination are on different filesystems.

    POSIX reports EXDEV; Windows reports ERROR_NOT_SAME_DEVICE (17) in winerror.
    """
    if getattr(error, "winerror", None) == 17:
        return True
    return error.errno == errno.EXDEV


def format_size(size_bytes: int) -> str:
    """
    Format a byte count for display.

    Examples:
        >>> format_size(512)
        '512B'
        >>> format_size(1536)
        '1.5KB'
    """
    size = float(size_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{size_bytes}B"
    return f"{size:.1f}{SIZE_UNITS[unit_index]}"


def format_time(timestamp: float, now: Optional[float] = None) -> str:
    """
    Format a timestamp as local HH:MM, prefixed with the date when it is not today.

    Args:
        timestamp: POSIX timestamp to format
        now: Reference time used to decide whether the date is shown
    """
    moment = datetime.fromtimestamp(timestamp)
    reference = datetime.fromtimestamp(now) if now is not None else datetime.now()
    if moment.date() == reference.date():
        return moment.strftime("%H:%M")
    return moment.strftime("%Y-%m-%d %H:%M")
