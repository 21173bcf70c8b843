"""Orchestration of puzzle sessions: API requests -> ChessPuzzle -> repository (and back)."""

import logging
import random
from typing import Optional
from uuid import UUID

from src.api.models import (
    AdvanceRequest,
    GetPuzzleRequest,
    GuessRequest,
    GuessResponse,
    HintRequest,
    HintResponse,
    PuzzleResponse,
    StartPuzzleRequest,
)
from src.chess.square import Square
from src.core.config import Settings, get_settings
from src.core.exceptions import (
    InvalidPuzzleRecordError,
    PuzzleLibraryError,
    PuzzleStateError,
    RepositoryError,
)
from src.core.models import PuzzleModel
from src.core.shared_types import PuzzleStatus
from src.db.repository import PuzzleRepository
from src.puzzles.library import PuzzleLibrary
from src.puzzles.puzzle import ChessPuzzle
from src.puzzles.rating import rating_change
from src.services.chess_service import color_name

logger = logging.getLogger(__name__)


class PuzzleService:
    """Orchestration of layers for puzzle mode."""

    def __init__(
        self,
        repository: PuzzleRepository,
        library: Optional[PuzzleLibrary] = None,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.library = library
        self.settings = settings or get_settings()
        self.rng = rng

    # -- API routes logic ---
    def start_puzzle(self, request: StartPuzzleRequest) -> PuzzleResponse:
        """
        Start a new puzzle session.
        ----

        The opponent's first move is already played when the session is returned.
        """
        record = request.record or self._random_record()
        puzzle = ChessPuzzle.from_record(
            record, opponent_delay=self.settings.opponent_reply_delay
        )
        if puzzle.is_solved():
            raise InvalidPuzzleRecordError(
                f"Puzzle {puzzle.puzzle_id} has no move left for the player to find."
            )
        player_rating = (
            request.player_rating
            if request.player_rating is not None
            else self.settings.starting_rating
        )
        model = PuzzleModel(
            record=record,
            position_fen=puzzle.to_fen(),
            current_step=puzzle.current_step,
            player_rating=player_rating,
        )
        stored, session_id = self.repo.create_puzzle(model)
        logger.info("Started puzzle %s in session %s", puzzle.puzzle_id, session_id)
        return self._create_puzzle_response(session_id, stored, puzzle)

    def get_puzzle_state(self, request: GetPuzzleRequest) -> PuzzleResponse:
        model = self._fetch_puzzle(request.session_id)
        return self._create_puzzle_response(
            request.session_id, model, self._restore(model)
        )

    def make_guess(self, request: GuessRequest) -> GuessResponse:
        """A wrong guess is not an error: the response says so and the session is unchanged."""
        model = self._fetch_puzzle(request.session_id)
        puzzle = self._restore(model)

        correct = puzzle.make_guess(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )
        if correct:
            model = self._store(request.session_id, model, puzzle)

        response = self._create_puzzle_response(request.session_id, model, puzzle)
        return GuessResponse(**response.model_dump(), correct=correct)

    def advance(self, request: AdvanceRequest) -> PuzzleResponse:
        """Play the opponent's reply that became due after a correct guess."""
        model = self._fetch_puzzle(request.session_id)
        puzzle = self._restore(model)
        if not puzzle.opponent_move_pending:
            raise PuzzleStateError("The opponent has no move to make right now.")

        puzzle.make_opponent_move()
        model = self._store(request.session_id, model, puzzle)
        return self._create_puzzle_response(request.session_id, model, puzzle)

    def hint(self, request: HintRequest) -> HintResponse:
        """Either only the piece that has to move, or the entire move. Either way the hint counts against the rating."""
        model = self._fetch_puzzle(request.session_id)
        puzzle = self._restore(model)
        if puzzle.is_solved():
            raise PuzzleStateError("Puzzle already solved: no hint available.")
        if puzzle.opponent_move_pending:
            raise PuzzleStateError("No hint while the opponent's reply is pending.")

        if request.full_move:
            move = puzzle.request_hint_move()
            assert move is not None
            from_square, to_square = move.from_square, move.to_square
        else:
            from_square = puzzle.request_hint()
            assert from_square is not None
            to_square = None

        self._store(request.session_id, model, puzzle)
        return HintResponse(
            session_id=request.session_id,
            from_square=from_square.to_algebraic(),
            to_square=to_square.to_algebraic() if to_square else None,
        )

    def play_solution_step(self, request: AdvanceRequest) -> PuzzleResponse:
        """
        Show the solution, one move per call.
        ----

        Plays the opponent's reply if it is due, otherwise the player's next move. Counts as using a hint.
        """
        model = self._fetch_puzzle(request.session_id)
        puzzle = self._restore(model)
        if puzzle.is_solved():
            raise PuzzleStateError("Puzzle already solved: no solution step left.")

        if puzzle.opponent_move_pending:
            puzzle.make_opponent_move()
        else:
            puzzle.used_hint = True
            move = puzzle.peek_next_move()
            puzzle.make_guess(move.from_square, move.to_square)

        model = self._store(request.session_id, model, puzzle)
        return self._create_puzzle_response(request.session_id, model, puzzle)

    def delete_puzzle(self, request: GetPuzzleRequest) -> None:
        if self.repo.delete_puzzle(request.session_id) is None:
            raise RepositoryError(f"Puzzle session {request.session_id} not found.")

    # -- Internal helpers --
    def _random_record(self) -> str:
        if self.library is None:
            raise PuzzleLibraryError("No puzzle library configured to pick a puzzle from.")
        return self.library.random_playable_line(self.rng)

    def _restore(self, model: PuzzleModel) -> ChessPuzzle:
        return ChessPuzzle.resume(
            model.record,
            current_step=model.current_step,
            used_hint=model.used_hint,
            opponent_move_pending=model.opponent_move_pending,
            opponent_delay=self.settings.opponent_reply_delay,
        )

    def _store(
        self, session_id: UUID, model: PuzzleModel, puzzle: ChessPuzzle
    ) -> PuzzleModel:
        """Capture the puzzle's state. Solving it settles the rating (once)."""
        updated = PuzzleModel(
            record=model.record,
            position_fen=puzzle.to_fen(),
            current_step=puzzle.current_step,
            player_rating=model.player_rating,
            used_hint=puzzle.used_hint,
            opponent_move_pending=puzzle.opponent_move_pending,
            rating_awarded=model.rating_awarded,
        )
        if puzzle.is_solved() and updated.rating_awarded is None:
            # a hint turns the puzzle into a loss
            earned = rating_change(
                model.player_rating, puzzle.rating, won=not puzzle.used_hint
            )
            updated.rating_awarded = earned
            updated.player_rating = model.player_rating + earned
            logger.info(
                "Puzzle %s solved, rating %+d (now %d)",
                puzzle.puzzle_id,
                earned,
                updated.player_rating,
            )
        self.repo.update_puzzle(session_id, updated)
        return updated

    def _create_puzzle_response(
        self, session_id: UUID, model: PuzzleModel, puzzle: ChessPuzzle
    ) -> PuzzleResponse:
        if puzzle.is_solved():
            status = PuzzleStatus.SOLVED
        elif puzzle.opponent_move_pending:
            status = PuzzleStatus.AWAITING_OPPONENT
        else:
            status = PuzzleStatus.AWAITING_GUESS

        return PuzzleResponse(
            session_id=session_id,
            puzzle_id=puzzle.puzzle_id,
            rating=puzzle.rating,
            themes=puzzle.themes,
            fen_state=puzzle.to_fen(),
            side_to_move=color_name(puzzle.current_player),
            board=puzzle.get_board(),
            current_step=puzzle.current_step,
            total_steps=len(puzzle.solution_moves),
            status=status,
            used_hint=puzzle.used_hint,
            opponent_reply_delay=(
                puzzle.opponent_delay if puzzle.opponent_move_pending else None
            ),
            player_rating=model.player_rating,
            rating_awarded=model.rating_awarded,
        )

    def _fetch_puzzle(self, session_id: UUID) -> PuzzleModel:
        model = self.repo.get_puzzle(session_id)
        if model is None:
            raise RepositoryError(f"Puzzle session {session_id} not found.")
        return model
