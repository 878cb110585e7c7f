"""Error types raised by the puzzle core and its providers."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for every recoverable puzzle error."""


class InvalidDefinition(PuzzleError):
    """A puzzle definition is malformed (bad dimensions or tile set)."""


class NoPuzzleLoaded(PuzzleError):
    """An operation needing a grid was called before a puzzle was loaded."""

    def __init__(self, message: str = "No puzzle is loaded.") -> None:
        super().__init__(message)


class ProviderError(PuzzleError):
    """The puzzle provider failed to deliver or accept a puzzle."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
