"""Puzzle definition and tile types supplied by a puzzle provider."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from backend.errors import InvalidDefinition


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class MoveResult(StrEnum):
    MOVED = "moved"
    SOLVED = "solved"
    ILLEGAL = "illegal"


@dataclass(frozen=True)
class Tile:
    """One piece of the source image, identified by its solved position."""

    home_index: int
    image_ref: Any = None


@dataclass(frozen=True)
class PuzzleDefinition:
    """A segmented puzzle as delivered by the provider.

    ``tiles`` holds the ``rows * cols - 1`` real tiles; the empty slot is
    implicit and belongs in the last cell of the solved grid.
    """

    rows: int
    cols: int
    tiles: tuple[Tile, ...]
    puzzle_id: str | None = None
    image_width: int = 0
    image_height: int = 0
    original_image_url: str | None = None

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PuzzleDefinition:
        """Parse the provider's JSON payload.

        Example::

            PuzzleDefinition.from_dict({
                "puzzleId": "abc", "rows": 2, "cols": 2,
                "imageWidth": 400, "imageHeight": 400,
                "tiles": [{"index": 0, "url": "..."}, ...],
            })
        """
        if not isinstance(data, dict):
            raise InvalidDefinition(
                f"Expected a puzzle object, got {type(data).__name__}."
            )
        try:
            rows = int(data["rows"])
            cols = int(data["cols"])
            tiles = tuple(
                Tile(home_index=int(t["index"]), image_ref=t.get("url"))
                for t in data["tiles"]
            )
            image_width = int(data.get("imageWidth") or 0)
            image_height = int(data.get("imageHeight") or 0)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise InvalidDefinition(f"Malformed puzzle definition: {exc!r}") from exc

        puzzle_id = data.get("puzzleId")
        return cls(
            rows=rows,
            cols=cols,
            tiles=tiles,
            puzzle_id=str(puzzle_id) if puzzle_id is not None else None,
            image_width=image_width,
            image_height=image_height,
            original_image_url=data.get("originalImageUrl"),
        )

    @classmethod
    def numbered(cls, rows: int, cols: int, puzzle_id: str | None = None) -> PuzzleDefinition:
        """Build a definition whose tile refs are just their labels."""
        count = max(rows * cols - 1, 0)
        tiles = tuple(Tile(home_index=i, image_ref=str(i + 1)) for i in range(count))
        return cls(rows=rows, cols=cols, tiles=tiles, puzzle_id=puzzle_id)

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return self.rows * self.cols
