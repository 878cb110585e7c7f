"""Grid model for the sliding puzzle."""

from __future__ import annotations

from backend.errors import InvalidDefinition
from backend.models.puzzle import MoveResult, PuzzleDefinition, Tile


class PuzzleGrid:
    """Represents the current arrangement of a puzzle.

    Cells are stored row-major in a flat list; ``None`` is the empty slot.
    ``empty_index`` always points at the single ``None`` cell.
    """

    def __init__(self, definition: PuzzleDefinition) -> None:
        rows, cols = definition.rows, definition.cols
        if rows < 1 or cols < 1:
            raise InvalidDefinition(
                f"Grid dimensions must be positive, got {rows}×{cols}."
            )
        expected = rows * cols - 1
        if len(definition.tiles) != expected:
            raise InvalidDefinition(
                f"Expected {expected} tiles for a {rows}×{cols} puzzle, "
                f"got {len(definition.tiles)}."
            )
        homes = sorted(t.home_index for t in definition.tiles)
        if homes != list(range(expected)):
            raise InvalidDefinition(
                f"Tile home indices must cover 0..{expected - 1} exactly once."
            )

        self.definition = definition
        self.rows = rows
        self.cols = cols
        self._solved: list[Tile | None] = sorted(
            definition.tiles, key=lambda t: t.home_index
        )
        self._solved.append(None)
        self.cells: list[Tile | None] = []
        self.empty_index = 0
        self.reset()

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def arrangement(self) -> tuple[Tile | None, ...]:
        return tuple(self.cells)

    def neighbors(self, index: int) -> set[int]:
        """Return the indices orthogonally adjacent to *index*."""
        row, col = divmod(index, self.cols)
        result: set[int] = set()
        if row > 0:
            result.add(index - self.cols)
        if row < self.rows - 1:
            result.add(index + self.cols)
        if col > 0:
            result.add(index - 1)
        if col < self.cols - 1:
            result.add(index + 1)
        return result

    def can_move(self, index: int) -> bool:
        """Check if the tile at *index* can slide into the empty slot."""
        if not 0 <= index < self.size:
            return False
        row, col = divmod(index, self.cols)
        empty_row, empty_col = divmod(self.empty_index, self.cols)
        return (row == empty_row and abs(col - empty_col) == 1) or (
            col == empty_col and abs(row - empty_row) == 1
        )

    def is_solved(self) -> bool:
        """Check if all tiles are in their home positions."""
        for i, cell in enumerate(self.cells[:-1]):
            if cell is None or cell.home_index != i:
                return False
        return True

    def is_tile_correct(self, index: int) -> bool:
        """Check if a specific cell holds the tile that belongs there."""
        cell = self.cells[index]
        if cell is None:
            return index == self.size - 1
        return cell.home_index == index

    # -- mutation -------------------------------------------------------------

    def move(self, index: int) -> MoveResult:
        """Slide the tile at *index* into the empty slot if it is adjacent."""
        if not self.can_move(index):
            return MoveResult.ILLEGAL
        self.swap_empty(index)
        return MoveResult.MOVED

    def swap_empty(self, index: int) -> None:
        """Swap *index* with the empty slot without checking adjacency."""
        e = self.empty_index
        self.cells[e], self.cells[index] = self.cells[index], self.cells[e]
        self.empty_index = index

    def reset(self) -> None:
        """Restore the solved arrangement (empty slot in the last cell)."""
        self.cells = list(self._solved)
        self.empty_index = self.size - 1
