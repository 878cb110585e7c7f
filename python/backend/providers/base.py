"""Interface every puzzle provider implements."""

from __future__ import annotations

from typing import Protocol

from backend.models.puzzle import PuzzleDefinition


class PuzzleProvider(Protocol):
    """Supplies segmented puzzles.  Every method raises ``ProviderError``."""

    def fetch_random_puzzle_id(self, difficulty: str) -> str: ...

    def fetch_puzzle_definition(self, puzzle_id: str) -> PuzzleDefinition: ...

    def create_puzzle(self, rows: int, cols: int, image_bytes: bytes) -> PuzzleDefinition: ...
