"""In-memory puzzle provider for offline play and tests."""

from __future__ import annotations

import itertools
import logging

from backend.errors import ProviderError
from backend.models.puzzle import Difficulty, PuzzleDefinition, Tile

logger = logging.getLogger(__name__)

DEFAULT_SIZES: dict[str, int] = {
    Difficulty.EASY: 3,
    Difficulty.MEDIUM: 4,
    Difficulty.HARD: 5,
}


class LocalPuzzleProvider:
    """Synthesizes numbered square puzzles; images are kept by reference only."""

    def __init__(self, sizes: dict[str, int] | None = None) -> None:
        self.sizes = dict(sizes or DEFAULT_SIZES)
        self._counter = itertools.count(1)
        self._puzzles: dict[str, PuzzleDefinition] = {}
        self.images: dict[str, bytes] = {}

    def fetch_random_puzzle_id(self, difficulty: str) -> str:
        size = self.sizes.get(str(difficulty))
        if size is None:
            raise ProviderError(f"Unknown difficulty {difficulty!r}.")
        puzzle_id = f"local-{size}x{size}-{next(self._counter)}"
        self._puzzles[puzzle_id] = PuzzleDefinition.numbered(size, size, puzzle_id)
        return puzzle_id

    def fetch_puzzle_definition(self, puzzle_id: str) -> PuzzleDefinition:
        try:
            return self._puzzles[puzzle_id]
        except KeyError:
            raise ProviderError(f"Puzzle {puzzle_id!r} not found.") from None

    def create_puzzle(self, rows: int, cols: int, image_bytes: bytes) -> PuzzleDefinition:
        if rows < 1 or cols < 1 or rows * cols < 2:
            raise ProviderError(f"Cannot cut a {rows}×{cols} puzzle.")
        if not image_bytes:
            raise ProviderError("No image provided.")

        puzzle_id = f"local-{rows}x{cols}-{next(self._counter)}"
        tiles = tuple(
            Tile(home_index=i, image_ref=f"{puzzle_id}#{i}")
            for i in range(rows * cols - 1)
        )
        definition = PuzzleDefinition(rows=rows, cols=cols, tiles=tiles, puzzle_id=puzzle_id)
        self._puzzles[puzzle_id] = definition
        self.images[puzzle_id] = image_bytes
        logger.debug("Created local puzzle %s", puzzle_id)
        return definition
