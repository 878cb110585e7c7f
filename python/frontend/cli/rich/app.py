"""Rich terminal frontend: styled grid, live clock and a status line.

Tiles are shown by their solved-position label; image references are
not rendered.  All game rules live in ``GamePlay``.
"""

from __future__ import annotations

import sys

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GamePlay
from backend.errors import PuzzleError
from backend.models.grid import PuzzleGrid
from backend.models.puzzle import Difficulty, Direction, MoveResult
from frontend.cli.input_handler import get_key, get_key_timeout

console = Console()

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

_DIFFICULTIES = {d.value: d for d in Difficulty}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: int) -> str:
    m, s = divmod(seconds, 60)
    return f"{m:02d}:{s:02d}"


def _stats(game: GamePlay) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.move_count), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.elapsed_seconds), style="bold yellow")
    stats.append("    Difficulty: ", style="dim")
    stats.append(game.difficulty, style="bold cyan")
    return stats


# -- grid rendering -----------------------------------------------------------


def _render_grid(grid: PuzzleGrid) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(grid.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(grid.cols):
        table.add_column(width=width + 1, justify="center")

    cells = grid.arrangement
    for r in range(grid.rows):
        row: list[str] = []
        for c in range(grid.cols):
            index = r * grid.cols + c
            tile = cells[index]
            if tile is None:
                row.append("[dim]·[/dim]")
            elif grid.is_tile_correct(index):
                row.append(f"[bold green]{tile.home_index + 1:>{width}}[/bold green]")
            else:
                row.append(f"[bold white]{tile.home_index + 1:>{width}}[/bold white]")
        table.add_row(*row)

    return table


# -- screens ------------------------------------------------------------------


def _draw_game(game: GamePlay, status: str = "") -> None:
    console.clear()

    grid = game.session.grid
    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  new   ", style="dim")
    controls.append("1-3", style="bold cyan")
    controls.append("  difficulty   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    panel = Panel(
        Align.center(_render_grid(grid)),
        title=f"[bold cyan]Sliding Puzzle  {grid.rows}×{grid.cols}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    # Cursor is saved before the stats line so _update_time() can repaint it.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats(game)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _update_time(game: GamePlay) -> None:
    """Repaint only the stats line at the saved cursor position."""
    sys.stdout.write("\033[u\033[K")
    sys.stdout.flush()
    console.print(Align.center(_stats(game)), end="")


def _draw_win(game: GamePlay) -> None:
    console.clear()

    grid = game.session.grid
    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append("  You solved it!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    panel = Panel(
        Group(
            Align.center(_render_grid(grid)),
            Align.center(congrats),
            Align.center(_stats(game)),
        ),
        title=f"[bold green]Sliding Puzzle  {grid.rows}×{grid.cols}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(
            Text("\n  Press R to play again, N for a new puzzle, Q to quit.\n", style="dim")
        )
    )


def _draw_error(message: str) -> None:
    console.clear()
    console.print()
    console.print(
        Align.center(
            Panel(
                Text(message, style="red"),
                title="[bold red]No puzzle available[/bold red]",
                border_style="red",
                padding=(1, 2),
            )
        )
    )
    console.print(Align.center(Text("\n  Press N to retry, 1-3 to change difficulty, Q to quit.\n", style="dim")))


# -- game loop ----------------------------------------------------------------


def _handle_command(game: GamePlay, key: str) -> str:
    """Run a non-move command; returns a status line."""
    try:
        if key == "restart":
            game.restart()
            return "[yellow]Scrambled![/yellow]"
        if key == "new":
            game.new_puzzle()
            return "[cyan]New puzzle loaded.[/cyan]"
        if key in _DIFFICULTIES:
            game.set_difficulty(_DIFFICULTIES[key])
            return f"[cyan]Difficulty set to {key}.[/cyan]"
    except PuzzleError as e:
        return f"[red]{e}[/red]"
    return ""


def _play(game: GamePlay) -> None:
    status = ""
    while True:
        if not game.session.is_loaded:
            _draw_error(status or "The puzzle service did not return a puzzle.")
            key = get_key()
            if key == "quit":
                return
            status = _handle_command(game, key)
            continue

        if game.is_won and game.move_count > 0:
            _draw_win(game)
            key = get_key()
            if key == "quit":
                return
            status = _handle_command(game, key)
            continue

        _draw_game(game, status)
        status = ""

        # Short timeout so the clock keeps repainting while idle.
        while True:
            key = get_key_timeout(0.5)
            if key is not None:
                break
            if game.session.timer_running:
                _update_time(game)

        if key in _DIRECTIONS:
            if game.move(_DIRECTIONS[key]) is MoveResult.ILLEGAL:
                status = "[dim]That tile cannot move.[/dim]"
        elif key == "quit":
            return
        else:
            status = _handle_command(game, key)


# -- public entry point -------------------------------------------------------


def run(game: GamePlay) -> None:
    """Play *game* in the terminal until the player quits."""
    try:
        _play(game)
    finally:
        game.close()
        console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
