"""
Exception hierarchy for the recent mover.

Config and move errors are fatal for a run; scan warnings are collected
per directory and never abort a scan.
"""

from pathlib import Path
from typing import Union


class RecentMoverError(Exception):
    """Base class for all recent mover errors."""


class ConfigError(RecentMoverError):
    """The config file is unreadable, malformed, or missing required fields."""


class ScanWarning(RecentMoverError):
    """A source directory could not be scanned and was skipped."""

    def __init__(self, directory: Union[str, Path], reason: str):
        self.directory = str(directory)
        self.reason = reason
        super().__init__(f"Skipping {self.directory}: {reason}")


class NoCandidatesError(RecentMoverError):
    """No files were created within the recency window."""


class MoveError(RecentMoverError):
    """The selected file could not be moved."""


class CollisionError(MoveError):
    """A file with the same name already exists at the destination."""

    def __init__(self, destination: Union[str, Path]):
        self.destination = str(destination)
        super().__init__(f"Destination already exists: {self.destination}")


class CrossDeviceFallbackError(MoveError):
    """Atomic rename is impossible because source and destination are on different filesystems."""


class PartialMoveError(MoveError):
    """The file was copied to the destination but the source could not be removed."""

    def __init__(self, source: Union[str, Path], destination: Union[str, Path], reason: str):
        self.source = str(source)
        self.destination = str(destination)
        self.reason = reason
        super().__init__(
            f"Copied {self.source} to {self.destination} but could not "
            f"remove the original ({reason}); remove one of them manually"
        )
