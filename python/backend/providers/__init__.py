from backend.providers.base import PuzzleProvider
from backend.providers.local import LocalPuzzleProvider
from backend.providers.remote import HttpPuzzleProvider

__all__ = ["HttpPuzzleProvider", "LocalPuzzleProvider", "PuzzleProvider"]
