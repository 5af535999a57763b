"""
Candidate scanner for recently created files.

This module is responsible for:
- Listing the direct entries of each configured source directory
- Keeping regular files created within the recency window
- Skipping hidden files and names matching the black list
- Isolating per-directory failures (missing or unreadable directories)
- Ordering candidates newest first, ties broken by path
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Sequence, Union

from .errors import ScanWarning
from .types import Candidate
from .utils import best_timestamp

logger = logging.getLogger(__name__)


def sort_candidates(candidates: Iterable[Candidate]) -> List[Candidate]:
    """Sort candidates by creation time descending, then by path ascending."""
    return sorted(candidates, key=lambda c: (-c.created_at, str(c.path)))


class CandidateScanner:
    """
    Scans source directories for files created within a recency window.

    The reference time is supplied by the caller so that every entry in a
    scan is compared against the same instant.
    """

    def __init__(
        self,
        time_limit_minutes: int,
        black_list: Sequence[str] = (),
        timestamp_fn: Callable[[os.stat_result], float] = best_timestamp
    ):
        """
        Initialize the scanner.

        Args:
            time_limit_minutes: Size of the recency window in minutes
            black_list: Substrings; files whose name contains one are skipped
            timestamp_fn: Maps a stat result to a creation timestamp
        """
        self.time_limit_minutes = time_limit_minutes
        self.black_list = list(black_list)
        self.timestamp_fn = timestamp_fn
        self.warnings: List[ScanWarning] = []

    @property
    def time_limit_seconds(self) -> int:
        return self.time_limit_minutes * 60

    def is_recent(self, created_at: float, now: float) -> bool:
        """Check whether a timestamp falls inside the window (boundary included)."""
        return now - created_at <= self.time_limit_seconds

    def is_ignored(self, name: str) -> bool:
        """Check whether a file name is hidden or black-listed."""
        if name.startswith("."):
            return True
        return any(blocked in name for blocked in self.black_list)

    def scan_directory(self, directory: Union[str, Path], now: float) -> List[Candidate]:
        """
        Scan the direct entries of one directory.

        Args:
            directory: The directory to list (not recursed into)
            now: Reference POSIX timestamp

        Returns:
            Unsorted list of candidates found in this directory

        Raises:
            ScanWarning: If the directory is missing, not a directory,
                         or cannot be listed
        """
        directory = Path(directory)

        try:
            if not directory.exists():
                raise ScanWarning(directory, "directory does not exist")
            if not directory.is_dir():
                raise ScanWarning(directory, "not a directory")
        except OSError as e:
            # exists() only swallows not-found errors (EACCES, ENAMETOOLONG escape)
            raise ScanWarning(directory, f"cannot be read ({e.strerror or e})") from e

        candidates: List[Candidate] = []
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if self.is_ignored(entry.name):
                        logger.debug(f"Ignoring {entry.path}")
                        continue

                    try:
                        if not entry.is_file():
                            continue
                        stat_result = entry.stat()
                    except OSError as e:
                        # Entry vanished or became unreadable while listing
                        logger.debug(f"Could not stat {entry.path}: {e}")
                        continue

                    created_at = self.timestamp_fn(stat_result)
                    if not self.is_recent(created_at, now):
                        continue

                    candidates.append(Candidate(
                        path=Path(entry.path),
                        display_name=entry.name,
                        size_bytes=stat_result.st_size,
                        created_at=created_at,
                    ))
        except OSError as e:
            raise ScanWarning(directory, f"cannot be read ({e.strerror or e})") from e

        logger.debug(f"Found {len(candidates)} recent files in {directory}")
        return candidates

    def scan(self, dirs: Iterable[Union[str, Path]], now: float) -> List[Candidate]:
        """
        Scan all directories and return candidates newest first.

        Directories that cannot be scanned are recorded in self.warnings
        and skipped; the remaining directories still contribute. Reporting
        the warnings to the user is left to the caller.

        Args:
            dirs: Source directories, scanned in order
            now: Reference POSIX timestamp shared by every directory

        Returns:
            Candidates sorted by created_at descending, ties by path
        """
        self.warnings = []
        candidates: List[Candidate] = []

        for directory in dirs:
            try:
                candidates.extend(self.scan_directory(directory, now))
            except ScanWarning as warning:
                logger.debug(str(warning))
                self.warnings.append(warning)

        logger.info(
            f"Found {len(candidates)} files created in the last "
            f"{self.time_limit_minutes} minutes"
        )
        return sort_candidates(candidates)


def scan(
    dirs: Iterable[Union[str, Path]],
    time_limit: int,
    now: float,
    black_list: Sequence[str] = ()
) -> List[Candidate]:
    """
    Scan directories for files created within the last time_limit minutes.

    Convenience wrapper around CandidateScanner for one-shot use.

    Args:
        dirs: Source directories (not recursed into)
        time_limit: Recency window in minutes
        now: Reference POSIX timestamp
        black_list: Substrings; files whose name contains one are skipped

    Returns:
        Candidates sorted newest first
    """
    scanner = CandidateScanner(time_limit, black_list=black_list)
    return scanner.scan(dirs, now)
