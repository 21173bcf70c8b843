"""
Custom exceptions shared across layers.

Gameplay rejections (illegal moves, wrong guesses) are NOT exceptions: those are reported through return values.
Everything here signals bad input data or a caller breaking a contract.
"""


class GameError(Exception):
    """Base class for all errors raised by this application."""


# --- DOMAIN ---
class InvalidSquareError(GameError):
    """Square notation or row/column indices outside of the board."""


class InvalidBoardError(GameError):
    """A board matrix that is not 8x8."""


class InvalidFENError(GameError):
    """String cannot be interpreted as a (FEN-like) position."""


class InvalidPuzzleRecordError(GameError):
    """Puzzle record (CSV line) is malformed."""


class PuzzleStateError(GameError):
    """Operation not allowed in the current state of the puzzle (ex. peeking at the next move of a solved puzzle)."""


class PuzzleLibraryError(GameError):
    """No (playable) puzzle could be read from the puzzle file."""


class GameStateError(GameError):
    """Operation not allowed in the current state of the game."""


# --- SERVICE / PERSISTENCE / API ---
class RepositoryError(GameError):
    """Record not found in the repository."""


class InvalidRequestError(GameError):
    """Request data failed validation."""
