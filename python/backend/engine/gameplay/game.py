"""Core gameplay logic: fetches puzzles, processes moves and tracks the win."""

from __future__ import annotations

import logging

from backend.engine.gamestate import Session
from backend.errors import ProviderError
from backend.models.preferences import PreferenceStore
from backend.models.puzzle import Direction, MoveResult, PuzzleDefinition, Tile
from backend.providers.base import PuzzleProvider

logger = logging.getLogger(__name__)


class GamePlay:
    """Orchestrates a game: provider calls, difficulty and the active session."""

    def __init__(
        self,
        provider: PuzzleProvider,
        session: Session | None = None,
        preferences: PreferenceStore | None = None,
        difficulty: str = "medium",
    ) -> None:
        self.provider = provider
        self.session = session if session is not None else Session()
        self.preferences = preferences
        if preferences is not None:
            difficulty = preferences.get_difficulty(difficulty)
        self.difficulty = difficulty

    # -- puzzle loading -------------------------------------------------------

    def new_puzzle(self) -> PuzzleDefinition:
        """Fetch a random puzzle at the current difficulty and load it.

        On ``ProviderError`` the session keeps whatever it had before.
        """
        try:
            puzzle_id = self.provider.fetch_random_puzzle_id(self.difficulty)
            definition = self.provider.fetch_puzzle_definition(puzzle_id)
        except ProviderError as e:
            logger.warning("Could not fetch a %s puzzle: %s", self.difficulty, e.message)
            raise
        self.session.load(definition)
        return definition

    def set_difficulty(self, difficulty: str) -> PuzzleDefinition:
        """Remember *difficulty* and load a fresh random puzzle for it."""
        self.difficulty = str(difficulty)
        if self.preferences is not None:
            self.preferences.set_difficulty(self.difficulty)
        return self.new_puzzle()

    def create_custom_puzzle(self, rows: int, cols: int, image_bytes: bytes) -> PuzzleDefinition:
        """Submit an image to the provider and play the puzzle it cuts."""
        try:
            definition = self.provider.create_puzzle(rows, cols, image_bytes)
        except ProviderError as e:
            logger.warning("Could not create a %d×%d puzzle: %s", rows, cols, e.message)
            raise
        self.session.load(definition)
        return definition

    def restart(self) -> None:
        self.session.restart()

    def close(self) -> None:
        self.session.close()

    # -- movement (direction = where the *tile* moves) ------------------------

    def move(self, direction: Direction) -> MoveResult:
        """Slide the tile next to the empty slot in *direction*.

        E.g. ``Direction.UP`` moves the tile **below** the empty slot upward.
        """
        grid = self.session.grid
        row, col = divmod(grid.empty_index, grid.cols)

        # The offset points to the tile that will slide into the empty slot.
        offsets = {
            Direction.UP: (1, 0),
            Direction.DOWN: (-1, 0),
            Direction.LEFT: (0, 1),
            Direction.RIGHT: (0, -1),
        }
        dr, dc = offsets[direction]
        tr, tc = row + dr, col + dc

        if not (0 <= tr < grid.rows and 0 <= tc < grid.cols):
            return MoveResult.ILLEGAL
        return self.session.apply_move(tr * grid.cols + tc)

    def move_tile(self, index: int) -> MoveResult:
        return self.session.apply_move(index)

    # -- queries --------------------------------------------------------------

    @property
    def arrangement(self) -> tuple[Tile | None, ...]:
        return self.session.arrangement

    @property
    def empty_index(self) -> int:
        return self.session.empty_index

    @property
    def move_count(self) -> int:
        return self.session.move_count

    @property
    def elapsed_seconds(self) -> int:
        return self.session.elapsed_seconds

    @property
    def is_won(self) -> bool:
        return self.session.is_solved
