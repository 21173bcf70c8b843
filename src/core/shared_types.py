"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    WON = "won"


class PuzzleStatus(StrEnum):
    AWAITING_GUESS = "awaiting guess"
    AWAITING_OPPONENT = "awaiting opponent"
    SOLVED = "solved"


# NOTE the domain layer uses IntEnum versions (src/chess/pieces.py) so the signed piece code algebra works.
# These string versions are the ones that travel across the API boundary.
class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"
