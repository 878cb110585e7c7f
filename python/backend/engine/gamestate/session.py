"""Tracks the progress of a puzzle in play."""

from __future__ import annotations

import functools
import logging
import threading
from typing import Callable

from backend.config import get_settings
from backend.engine.gamegenerator import Shuffler
from backend.engine.gamestate.ticker import RepeatingTicker, Ticker, TickerFactory
from backend.errors import NoPuzzleLoaded
from backend.models.grid import PuzzleGrid
from backend.models.puzzle import MoveResult, PuzzleDefinition, Tile

logger = logging.getLogger(__name__)


def _default_ticker_factory(callback: Callable[[], None]) -> Ticker:
    return RepeatingTicker(get_settings().TICK_INTERVAL, callback)


class Session:
    """Holds the current grid, move counter, and elapsed time.

    The clock starts on the first accepted move after a load or restart
    and stops the moment the grid is solved; later moves leave it frozen
    until the next load or restart.  Ticks are delivered by a ``Ticker``;
    each started ticker carries a generation number, and ticks from a
    stale generation are dropped under the same lock that guards the
    counters.
    """

    def __init__(
        self,
        shuffler: Shuffler | None = None,
        ticker_factory: TickerFactory | None = None,
    ) -> None:
        self.shuffler = shuffler if shuffler is not None else Shuffler()
        self._ticker_factory = ticker_factory or _default_ticker_factory
        self._lock = threading.Lock()
        self._grid: PuzzleGrid | None = None
        self._ticker: Ticker | None = None
        self._generation = 0
        self.move_count: int = 0
        self.elapsed_seconds: int = 0
        self.timer_running: bool = False
        self._clock_started = False
        self.last_walk: list[int] = []

    # -- lifecycle ------------------------------------------------------------

    def load(self, definition: PuzzleDefinition) -> None:
        """Build a grid from *definition*, scramble it and reset progress."""
        grid = PuzzleGrid(definition)
        self._stop_timer()
        with self._lock:
            self._grid = grid
            self.last_walk = self.shuffler.shuffle(grid)
            self._reset_counters()
        logger.info(
            "Loaded puzzle %s (%d×%d)",
            definition.puzzle_id or "<local>",
            definition.rows,
            definition.cols,
        )

    def restart(self) -> None:
        """Re-scramble the current puzzle and reset progress."""
        grid = self._require_grid()
        self._stop_timer()
        with self._lock:
            self.last_walk = self.shuffler.shuffle(grid)
            self._reset_counters()
        logger.info("Restarted puzzle %s", grid.definition.puzzle_id or "<local>")

    def close(self) -> None:
        """Stop the clock; no tick is delivered after this returns."""
        self._stop_timer()

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- moves ----------------------------------------------------------------

    def apply_move(self, index: int) -> MoveResult:
        """Slide the tile at *index*; counters change only on legal moves."""
        grid = self._require_grid()
        ticker: Ticker | None = None
        solved = False
        with self._lock:
            if grid.move(index) is MoveResult.ILLEGAL:
                return MoveResult.ILLEGAL
            if not self._clock_started:
                self._start_timer()
            self.move_count += 1
            solved = grid.is_solved()
            if solved:
                ticker = self._detach_timer()
        if solved:
            if ticker is not None:
                ticker.cancel()
            logger.info(
                "Puzzle solved in %d moves, %ds", self.move_count, self.elapsed_seconds
            )
            return MoveResult.SOLVED
        return MoveResult.MOVED

    # -- queries --------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._grid is not None

    @property
    def grid(self) -> PuzzleGrid:
        return self._require_grid()

    @property
    def definition(self) -> PuzzleDefinition:
        return self._require_grid().definition

    @property
    def arrangement(self) -> tuple[Tile | None, ...]:
        return self._require_grid().arrangement

    @property
    def empty_index(self) -> int:
        return self._require_grid().empty_index

    @property
    def is_solved(self) -> bool:
        return self._grid is not None and self._grid.is_solved()

    # -- time tracking --------------------------------------------------------

    def _on_tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or not self.timer_running:
                return
            self.elapsed_seconds += 1

    def _start_timer(self) -> None:
        # Caller holds the lock.
        self._generation += 1
        self._clock_started = True
        self.elapsed_seconds = 0
        self.timer_running = True
        self._ticker = self._ticker_factory(
            functools.partial(self._on_tick, self._generation)
        )
        self._ticker.start()

    def _detach_timer(self) -> Ticker | None:
        # Caller holds the lock.
        self._generation += 1
        self.timer_running = False
        ticker, self._ticker = self._ticker, None
        return ticker

    def _stop_timer(self) -> None:
        with self._lock:
            ticker = self._detach_timer()
        if ticker is not None:
            ticker.cancel()

    def _reset_counters(self) -> None:
        self.move_count = 0
        self.elapsed_seconds = 0
        self.timer_running = False
        self._clock_started = False

    def _require_grid(self) -> PuzzleGrid:
        if self._grid is None:
            raise NoPuzzleLoaded()
        return self._grid
