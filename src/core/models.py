"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class GameModel:
    """Transport-safe representation of a free-play game."""

    position_fen: str
    moves_uci: list[str] = field(default_factory=list)
    status: str = "in progress"
    winner: Optional[str] = None


@dataclass
class PuzzleModel:
    """
    Transport-safe representation of a puzzle being played.

    The record (CSV line) is the source of truth for the solution, the position is stored so it can be shown without replaying.
    """

    record: str
    position_fen: str
    current_step: int
    player_rating: int
    used_hint: bool = False
    opponent_move_pending: bool = False
    rating_awarded: Optional[int] = None
