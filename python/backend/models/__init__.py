from backend.models.grid import PuzzleGrid
from backend.models.preferences import PreferenceStore
from backend.models.puzzle import (
    Difficulty,
    Direction,
    MoveResult,
    PuzzleDefinition,
    Tile,
)

__all__ = [
    "Difficulty",
    "Direction",
    "MoveResult",
    "PreferenceStore",
    "PuzzleDefinition",
    "PuzzleGrid",
    "Tile",
]
