"""
Unit tests for candidate selection.
"""

import io
from pathlib import Path

import pytest
from rich.console import Console

from recent_mover import selector as selector_module
from recent_mover.errors import NoCandidatesError
from recent_mover.selector import (
    RichSelector,
    ScriptedSelector,
    build_table,
    display_names,
)
from recent_mover.types import Candidate

NOW = 1_700_000_000.0


def make_console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None)


def candidates():
    return [
        Candidate(Path("/src/old.txt"), "old.txt", 10, NOW - 600),
        Candidate(Path("/src/new.txt"), "new.txt", 2048, NOW - 60),
    ]


class TestDisplayNames:
    """Tests for display_names function."""

    def test_unique_names_kept(self):
        """Unique file names are shown as-is."""
        assert display_names(candidates()) == ["old.txt", "new.txt"]

    def test_duplicate_names_use_full_path(self):
        """Names shared across directories are replaced by full paths."""
        items = [
            Candidate(Path("/one/report.pdf"), "report.pdf", 1, NOW),
            Candidate(Path("/two/report.pdf"), "report.pdf", 1, NOW),
            Candidate(Path("/two/other.pdf"), "other.pdf", 1, NOW),
        ]

        assert display_names(items) == [
            str(Path("/one/report.pdf")),
            str(Path("/two/report.pdf")),
            "other.pdf",
        ]


class TestBuildTable:
    """Tests for build_table function."""

    def test_rows_rendered(self):
        """Each candidate becomes a numbered row with size and name."""
        console = make_console()
        console.print(build_table(candidates(), NOW))
        output = console.file.getvalue()

        assert "old.txt" in output
        assert "new.txt" in output
        assert "2.0KB" in output
        assert "10B" in output

    def test_markup_in_names_not_interpreted(self):
        """File names containing brackets are printed literally."""
        console = make_console()
        items = [Candidate(Path("/src/[draft] notes.txt"), "[draft] notes.txt", 1, NOW)]
        console.print(build_table(items, NOW))

        assert "[draft] notes.txt" in console.file.getvalue()


class TestRichSelector:
    """Tests for RichSelector."""

    def test_empty_raises(self):
        """No candidates raises NoCandidatesError without prompting."""
        selector = RichSelector(make_console(), stream=io.StringIO(""))

        with pytest.raises(NoCandidatesError):
            selector.select([])

    def test_pick_by_number(self):
        """Numbers refer to the newest-first ordering."""
        selector = RichSelector(make_console(), stream=io.StringIO("1\n"), now=NOW)

        selected = selector.select(candidates())

        assert selected.display_name == "new.txt"

    def test_pick_second(self):
        """Choosing 2 picks the older file."""
        selector = RichSelector(make_console(), stream=io.StringIO("2\n"), now=NOW)

        assert selector.select(candidates()).display_name == "old.txt"

    def test_invalid_choice_reprompts(self):
        """Out-of-range answers are rejected and the prompt repeats."""
        console = make_console()
        selector = RichSelector(console, stream=io.StringIO("9\n2\n"), now=NOW)

        selected = selector.select(candidates())

        assert selected.display_name == "old.txt"
        assert console.file.getvalue().count("Select a file to move") == 2

    def test_cancel_with_q(self):
        """Answering q cancels the selection."""
        selector = RichSelector(make_console(), stream=io.StringIO("q\n"), now=NOW)

        assert selector.select(candidates()) is None

    @pytest.mark.parametrize("interrupt", [KeyboardInterrupt, EOFError])
    def test_interrupt_cancels(self, monkeypatch, interrupt):
        """Ctrl+C or end of input at the prompt cancels the selection."""
        def raise_interrupt(*args, **kwargs):
            raise interrupt()

        monkeypatch.setattr(selector_module.Prompt, "ask", raise_interrupt)
        selector = RichSelector(make_console(), now=NOW)

        assert selector.select(candidates()) is None


class TestScriptedSelector:
    """Tests for ScriptedSelector."""

    def test_picks_first_by_default(self):
        """Index 0 is the most recent candidate."""
        assert ScriptedSelector().select(candidates()).display_name == "new.txt"

    def test_none_index_cancels(self):
        """index=None simulates a cancelled prompt."""
        assert ScriptedSelector(None).select(candidates()) is None

    def test_empty_raises(self):
        """No candidates raises NoCandidatesError."""
        with pytest.raises(NoCandidatesError):
            ScriptedSelector().select([])
