"""Scrambles puzzle grids into solvable starting arrangements."""

from __future__ import annotations

import logging
import random

from backend.config import get_settings
from backend.models.grid import PuzzleGrid

logger = logging.getLogger(__name__)


class Shuffler:
    """Creates solvable puzzles by walking the empty slot from the solved state.

    Every step is a legal move, so the result is always reachable from
    (and back to) the solved arrangement.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        move_count: int | None = None,
        small_moves: int | None = None,
        large_moves: int | None = None,
        large_cols: int | None = None,
    ) -> None:
        settings = get_settings()
        self.rng = rng if rng is not None else random.Random()
        self.move_count = move_count
        self.small_moves = small_moves if small_moves is not None else settings.SHUFFLE_MOVES_SMALL
        self.large_moves = large_moves if large_moves is not None else settings.SHUFFLE_MOVES_LARGE
        self.large_cols = large_cols if large_cols is not None else settings.LARGE_GRID_COLS

    def moves_for(self, grid: PuzzleGrid) -> int:
        """Return the walk length used for *grid*."""
        if self.move_count is not None:
            return self.move_count
        return self.large_moves if grid.cols >= self.large_cols else self.small_moves

    def shuffle(self, grid: PuzzleGrid, move_count: int | None = None) -> list[int]:
        """Reset *grid* to solved, then apply a random walk in-place.

        Returns the empty-slot positions visited, one per step.
        """
        steps = self.moves_for(grid) if move_count is None else move_count
        grid.reset()
        walk: list[int] = []

        for _ in range(steps):
            neighbors = sorted(grid.neighbors(grid.empty_index))
            if not neighbors:
                break
            target = self.rng.choice(neighbors)
            grid.swap_empty(target)
            walk.append(target)

        logger.debug(
            "Shuffled %d×%d grid with %d steps", grid.rows, grid.cols, len(walk)
        )
        return walk

    @staticmethod
    def undo_sequence(grid: PuzzleGrid, walk: list[int]) -> list[int]:
        """Return the tile indices to move, in order, to undo *walk*.

        Assumes *grid* has not moved since the shuffle that produced *walk*.
        """
        if not walk:
            return []
        previous = [grid.size - 1] + walk[:-1]
        return list(reversed(previous))
