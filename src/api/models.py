"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.fen import parse_fen
from src.chess.square import Square
from src.core.exceptions import InvalidFENError, InvalidRequestError, InvalidSquareError
from src.core.shared_types import Color, PuzzleStatus, Status
from src.puzzles.record import MIN_RECORD_FIELDS

Board = list[list[int]]


def _validate_square(value: str) -> str:
    """Squares travel as algebraic notation: 'e2', 'H7', etc."""
    try:
        Square.from_algebraic(value)
    except InvalidSquareError as exc:
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        ) from exc
    return value


# --- REQUEST MODELS: FREE PLAY ---
class CreateGameRequest(BaseModel):
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            parse_fen(value.strip())
        except InvalidFENError as exc:
            raise InvalidRequestError(str(exc)) from exc
        return value.strip()


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class MoveBody(BaseModel):
    """Body of a move / guess: the squares. (The id is part of the URL)"""

    from_square: str
    to_square: str

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class MoveRequest(MoveBody):
    game_id: UUID


# --- REQUEST MODELS: PUZZLES ---
class StartPuzzleRequest(BaseModel):
    """Without a record, a random puzzle is picked from the puzzle library."""

    record: Optional[str] = None
    player_rating: Optional[int] = None

    @field_validator("record")
    @classmethod
    def validate_record(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if len(value.strip().split(",")) < MIN_RECORD_FIELDS:
            raise InvalidRequestError(
                f"Puzzle record must contain at least {MIN_RECORD_FIELDS} comma separated fields."
            )
        return value.strip()


class GetPuzzleRequest(BaseModel):
    session_id: UUID


class GuessRequest(MoveBody):
    session_id: UUID


class AdvanceRequest(BaseModel):
    session_id: UUID


class HintRequest(BaseModel):
    session_id: UUID
    full_move: bool = False


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    fen_state: str
    side_to_move: Color
    board: Board
    move_history: list[str]
    status: Status
    winner: Optional[Color] = None


class MoveResponse(GameResponse):
    accepted: bool


class PuzzleResponse(BaseModel):
    session_id: UUID
    puzzle_id: str
    rating: int
    themes: list[str]
    fen_state: str
    side_to_move: Color
    board: Board
    current_step: int
    total_steps: int
    status: PuzzleStatus
    used_hint: bool
    # seconds to wait before asking for the opponent's reply (only while it is pending)
    opponent_reply_delay: Optional[float] = None
    player_rating: int
    rating_awarded: Optional[int] = None


class GuessResponse(PuzzleResponse):
    correct: bool


class HintResponse(BaseModel):
    session_id: UUID
    from_square: str
    to_square: Optional[str] = None
