"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    MoveResponse,
)
from src.chess.board import Board
from src.chess.events import GameWon
from src.chess.fen import STARTING_FEN
from src.chess.moves import Move
from src.chess.pieces import Color as PieceColor
from src.chess.square import Square
from src.core.exceptions import GameStateError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color, Status
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


def color_name(color: PieceColor) -> Color:
    """Domain color (signed int) -> the string version used across the API boundary"""
    return Color.WHITE if color == PieceColor.WHITE else Color.BLACK


class ChessService:
    """Orchestration of layers for free-play chess games."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a game from the standard starting position, or from the supplied FEN."""
        board = Board.from_fen(request.starting_fen or STARTING_FEN)
        new_game = GameModel(position_fen=board.to_fen())

        stored_game, game_id = self.repo.create_game(new_game)
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        An illegal move is not an error: the response simply says it was not accepted and the game is unchanged.
        """
        stored_model = self._fetch_game(request.game_id)
        if stored_model.status != Status.IN_PROGRESS:
            raise GameStateError(
                f"Game is not in progress. status: {stored_model.status}"
            )

        board = Board.from_fen(stored_model.position_fen)
        from_square = Square.from_algebraic(request.from_square)
        to_square = Square.from_algebraic(request.to_square)

        accepted = board.move_piece(from_square, to_square)
        if not accepted:
            response = self._create_game_response(request.game_id, stored_model)
            return MoveResponse(**response.model_dump(), accepted=False)

        updated = GameModel(
            position_fen=board.to_fen(),
            moves_uci=[
                *stored_model.moves_uci,
                Move(from_square, to_square).to_uci(),
            ],
            status=stored_model.status,
            winner=stored_model.winner,
        )
        for event in board.events.drain():
            if isinstance(event, GameWon):
                updated.status = Status.WON
                updated.winner = color_name(event.winner)

        self.repo.update_game(request.game_id, updated)
        response = self._create_game_response(request.game_id, updated)
        return MoveResponse(**response.model_dump(), accepted=True)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with {request.game_id=} not found.")

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        board = Board.from_fen(model.position_fen)
        return GameResponse(
            game_id=game_id,
            fen_state=model.position_fen,
            side_to_move=color_name(board.current_player),
            board=board.get_board(),
            move_history=model.moves_uci,
            status=Status(model.status),
            winner=Color(model.winner) if model.winner else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
