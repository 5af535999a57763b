"""
Interactive selection of one candidate.

This module is responsible for:
- Rendering candidates as a table (time, size, name), newest first
- Prompting for exactly one choice, with 'q' or Ctrl+C to cancel
- Disambiguating candidates that share a file name by showing full paths
- Providing a scripted selector for non-interactive use and tests
"""

import logging
from collections import Counter
from typing import IO, List, Optional, Protocol, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from .errors import NoCandidatesError
from .scanner import sort_candidates
from .types import Candidate
from .utils import format_size, format_time

logger = logging.getLogger(__name__)

CANCEL_CHOICE = "q"


class Selector(Protocol):
    """Picks one candidate, or returns None when the user cancels."""

    def select(self, candidates: Sequence[Candidate]) -> Optional[Candidate]:
        ...


def display_names(candidates: Sequence[Candidate]) -> List[str]:
    """
    Return the name to show for each candidate.

    Names that occur more than once (same file name in different source
    directories) are replaced by the candidate's full path.
    """
    counts = Counter(c.display_name for c in candidates)
    return [
        str(c.path) if counts[c.display_name] > 1 else c.display_name
        for c in candidates
    ]


def build_table(candidates: Sequence[Candidate], now: Optional[float] = None) -> Table:
    """Build the candidate table; rows are numbered from 1."""
    table = Table(box=None, show_edge=False, pad_edge=False)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Created")
    table.add_column("Size", justify="right")
    table.add_column("Name", overflow="fold")

    for index, (candidate, name) in enumerate(
        zip(candidates, display_names(candidates)), start=1
    ):
        table.add_row(
            str(index),
            format_time(candidate.created_at, now),
            format_size(candidate.size_bytes),
            escape(name),
        )
    return table


class RichSelector:
    """Terminal selector built on rich's table rendering and prompt."""

    def __init__(
        self,
        console: Optional[Console] = None,
        stream: Optional[IO[str]] = None,
        now: Optional[float] = None
    ):
        """
        Args:
            console: Console to render to (defaults to a new stdout console)
            stream: Optional input stream for the prompt (defaults to stdin)
            now: Reference time used to decide whether dates are shown
        """
        self.console = console or Console()
        self.stream = stream
        self.now = now

    def select(self, candidates: Sequence[Candidate]) -> Optional[Candidate]:
        """
        Show candidates and block until the user picks one.

        Raises:
            NoCandidatesError: If there is nothing to choose from
        """
        if not candidates:
            raise NoCandidatesError("No files found")

        ordered = sort_candidates(candidates)
        self.console.print(build_table(ordered, self.now))

        choices = [str(i) for i in range(1, len(ordered) + 1)] + [CANCEL_CHOICE]
        try:
            answer = Prompt.ask(
                f"Select a file to move ([cyan]1-{len(ordered)}[/cyan], "
                f"[cyan]{CANCEL_CHOICE}[/cyan] to cancel)",
                console=self.console,
                choices=choices,
                show_choices=False,
                stream=self.stream,
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            logger.debug("Selection interrupted")
            return None

        if answer == CANCEL_CHOICE:
            logger.debug("Selection cancelled")
            return None

        selected = ordered[int(answer) - 1]
        logger.debug(f"Selected {selected.path}")
        return selected


class ScriptedSelector:
    """
    Non-interactive selector that always picks the same position.

    Args:
        index: Zero-based position in the newest-first ordering,
               or None to simulate a cancelled prompt
    """

    def __init__(self, index: Optional[int] = 0):
        self.index = index
        self.seen: List[Candidate] = []

    def select(self, candidates: Sequence[Candidate]) -> Optional[Candidate]:
        if not candidates:
            raise NoCandidatesError("No files found")

        self.seen = sort_candidates(candidates)
        if self.index is None:
            return None
        return self.seen[self.index]
