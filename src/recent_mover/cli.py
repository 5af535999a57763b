"""
Command-line entry point.

Wires the pipeline together: load config -> scan -> select -> move, and
turns the outcome into a message and an exit code.

Exit codes:
    0   A file was moved, or there was nothing to move
    1   Config error or move error
    130 Selection cancelled
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import load_config, default_config_path
from .errors import (
    ConfigError,
    CollisionError,
    MoveError,
    NoCandidatesError,
    PartialMoveError,
)
from .mover import move_file
from .scanner import CandidateScanner
from .selector import RichSelector, Selector
from .types import Config

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CANCELLED = 130


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="m",
        description=(
            "Pick a file created in the last few minutes in one of the "
            "configured directories and move it into the current directory."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Config file to use (default: {default_config_path()})",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def run(
    config: Config,
    selector: Selector,
    destination_dir: Path,
    now: float,
    console: Console
) -> int:
    """
    Run one scan/select/move pass.

    Args:
        config: Loaded configuration
        selector: Chooses the candidate to move
        destination_dir: Where the chosen file is moved to
        now: Reference POSIX timestamp for the recency window
        console: Console for user-facing messages

    Returns:
        Process exit code
    """
    scanner = CandidateScanner(
        config.time_limit_minutes,
        black_list=config.black_list,
    )
    candidates = scanner.scan(config.source_dirs, now)

    for warning in scanner.warnings:
        console.print(f"[yellow]Warning: {escape(str(warning))}[/yellow]")

    try:
        selection = selector.select(candidates)
    except NoCandidatesError:
        console.print(
            f"[red]No files found in the last "
            f"{config.time_limit_minutes} minutes[/red]"
        )
        return EXIT_OK

    if selection is None:
        console.print("[yellow]No file selected[/yellow]")
        return EXIT_CANCELLED

    try:
        result = move_file(selection, destination_dir)
    except CollisionError as e:
        console.print(
            f"[red]'{escape(selection.display_name)}' already exists in "
            f"{escape(str(destination_dir))}; nothing was moved[/red]"
        )
        logger.debug(str(e))
        return EXIT_ERROR
    except PartialMoveError as e:
        console.print(f"[yellow]{escape(str(e))}[/yellow]")
        console.print(f"  source:      {escape(e.source)}")
        console.print(f"  destination: {escape(e.destination)}")
        return EXIT_ERROR
    except MoveError as e:
        console.print(f"[red]Failed to move file: {escape(str(e))}[/red]")
        return EXIT_ERROR

    logger.debug(f"{result.status.value}: {result.source_path} -> {result.dest_path}")
    console.print(
        f"[green]Moved '{escape(selection.display_name)}' from "
        f"{escape(str(selection.source_dir))} to {escape(str(destination_dir))}[/green]"
    )
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    console = Console()
    err_console = Console(stderr=True)

    config_path = args.config.expanduser() if args.config is not None else default_config_path()
    created = not config_path.exists()

    try:
        config = load_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Failed to read configuration: {escape(str(e))}[/red]")
        return EXIT_ERROR

    if created:
        console.print(f"Created default configuration file at: {escape(str(config_path))}")

    now = time.time()
    return run(
        config,
        selector=RichSelector(console, now=now),
        destination_dir=Path.cwd(),
        now=now,
        console=console,
    )
