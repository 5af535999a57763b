"""
Type definitions and data classes for the recent mover.

This module defines:
- Config: Data class for the loaded configuration
- Candidate: Data class for a recently created file found by the scanner
- MoveStatus: Enum for successful move outcomes
- MoveResult: Data class representing the result of a move operation
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List


@dataclass
class Config:
    """
    Runtime configuration.

    Attributes:
        source_dirs: Directories to scan, in the order they were configured
        time_limit_minutes: Size of the recency window in minutes
        black_list: Substrings; files whose name contains one are ignored
    """
    source_dirs: List[Path]
    time_limit_minutes: int
    black_list: List[str] = field(default_factory=list)


@dataclass(slots=True)
class Candidate:
    """
    Represents a file created within the recency window.

    Attributes:
        path: Full path to the file
        display_name: The file's basename (e.g., "report.pdf")
        size_bytes: File size in bytes
        created_at: Best available creation time as a POSIX timestamp
    """
    path: Path
    display_name: str
    size_bytes: int
    created_at: float

    @property
    def source_dir(self) -> Path:
        return self.path.parent

    def __hash__(self):
        return hash(self.path)

    def __eq__(self, other):
        if not isinstance(other, Candidate):
            return False
        return self.path == other.path


class MoveStatus(Enum):
    """Outcome of a successful move."""
    MOVED = "moved"                    # Renamed in place
    MOVED_VIA_COPY = "moved_via_copy"  # Cross-device copy + delete


@dataclass
class MoveResult:
    """Result of a move operation."""
    source_path: str
    dest_path: str
    status: MoveStatus
    message: str
