#!/usr/bin/env python3
"""Sliding Puzzle Game.

Usage::

    python main.py                         # random puzzle from the service
    python main.py -d hard                 # pick the difficulty
    python main.py --offline               # numbered puzzles, no network
    python main.py --image cat.jpg -r 4    # cut your own 4×4 puzzle
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import get_settings  # noqa: E402
from backend.engine.gameplay import GamePlay  # noqa: E402
from backend.errors import PuzzleError  # noqa: E402
from backend.models.preferences import PreferenceStore  # noqa: E402
from backend.models.puzzle import Difficulty  # noqa: E402
from backend.providers import HttpPuzzleProvider, LocalPuzzleProvider  # noqa: E402


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    difficulty: Optional[Difficulty] = typer.Option(
        None, "-d", "--difficulty",
        help="Puzzle difficulty. Defaults to the last one played.",
    ),
    offline: bool = typer.Option(
        False, "--offline",
        help="Use locally generated numbered puzzles instead of the service.",
    ),
    image: Optional[Path] = typer.Option(
        None, "-i", "--image",
        exists=True, dir_okay=False, readable=True,
        help="Create a new puzzle from this image.",
    ),
    rows: int = typer.Option(
        3, "-r", "--rows",
        min=2, max=10,
        help="Rows (and columns) for a puzzle created with --image.",
    ),
    api_url: Optional[str] = typer.Option(
        None, "--api-url",
        help="Base URL of the puzzle service.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log debug output.",
    ),
) -> None:
    """Sliding Puzzle Game."""
    _configure_logging(verbose)
    settings = get_settings()

    provider = LocalPuzzleProvider() if offline else HttpPuzzleProvider(base_url=api_url)
    preferences = PreferenceStore(settings.DATA_DIR / "preferences.json")
    game = GamePlay(
        provider,
        preferences=preferences,
        difficulty=settings.DEFAULT_DIFFICULTY,
    )

    try:
        if image is not None:
            game.create_custom_puzzle(rows, rows, image.read_bytes())
        elif difficulty is not None:
            game.set_difficulty(difficulty)
        else:
            game.new_puzzle()
    except PuzzleError as e:
        # The frontend shows the unloaded state and lets the player retry.
        logging.getLogger(__name__).error("%s", e)

    from frontend.cli.rich.app import run

    run(game)


if __name__ == "__main__":
    app()
