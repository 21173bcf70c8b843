"""
Puzzle mode
---

A puzzle is a board plus a scripted line of moves. The first move of the line is always the opponent's,
after that the player has to guess every other move while the opponent's replies are played for them.

The opponent does not reply by itself: after a correct guess the puzzle announces (OpponentMoveScheduled)
that a reply is due, and whoever drives the puzzle (a test, a timer, the HTTP client) calls `make_opponent_move()`.
"""

import logging
from typing import Self

from src.chess.board import Board
from src.chess.events import (
    EventQueue,
    HintAvailable,
    HintMoveAvailable,
    OpponentMoveScheduled,
    PuzzleBeaten,
)
from src.chess.fen import Grid
from src.chess.moves import Move
from src.chess.pieces import Color
from src.chess.square import Square
from src.core.exceptions import PuzzleStateError
from src.puzzles.record import PuzzleRecord

logger = logging.getLogger(__name__)

DEFAULT_OPPONENT_DELAY = 1.0


class ChessPuzzle:
    """Holds a Board (composition) and the cursor into the solution sequence"""

    def __init__(
        self,
        board: Grid | None = None,
        solution_moves: list[Move] | None = None,
        rating: int = 0,
        puzzle_id: str = "",
        themes: list[str] | None = None,
        opponent_delay: float = DEFAULT_OPPONENT_DELAY,
    ) -> None:
        """Explicit state: the board and moves are installed as given, nothing gets played yet."""
        self.board = Board()
        if board is not None:
            self.board.load_board(board)
        self._solution_moves: list[Move] = list(solution_moves or [])
        self._current_step = 0
        self._rating = rating
        self.puzzle_id = puzzle_id
        self.themes: list[str] = list(themes or [])
        self.opponent_delay = opponent_delay
        self.used_hint = False
        self.opponent_move_pending = False

    @classmethod
    def from_record(
        cls, line: str, opponent_delay: float = DEFAULT_OPPONENT_DELAY
    ) -> Self:
        """
        Create a puzzle from a line of the puzzle database
        ---

        1. parse the record (raises InvalidPuzzleRecordError when malformed)
        2. set up the position from the FEN
        3. read the solution
        4. play the opponent's first move
        """
        record = PuzzleRecord.from_csv_line(line)
        puzzle = cls(
            rating=record.rating,
            puzzle_id=record.puzzle_id,
            themes=record.themes,
            opponent_delay=opponent_delay,
        )
        puzzle.load_fen(record.fen)
        puzzle.load_moves(" ".join(record.moves))
        puzzle.make_opponent_move()
        logger.info(
            "Loaded puzzle %s (rating %d, %d moves)",
            record.puzzle_id,
            record.rating,
            len(puzzle._solution_moves),
        )
        return puzzle

    @classmethod
    def resume(
        cls,
        line: str,
        current_step: int,
        used_hint: bool = False,
        opponent_move_pending: bool = False,
        opponent_delay: float = DEFAULT_OPPONENT_DELAY,
    ) -> Self:
        """
        Rebuild a puzzle part way through its solution (ex. after loading it from the database).
        The solution is scripted, so replaying it up to `current_step` reproduces the position exactly.
        """
        puzzle = cls.from_record(line, opponent_delay=opponent_delay)
        if current_step > len(puzzle._solution_moves):
            raise PuzzleStateError(
                f"Cannot resume at step {current_step}: the solution only has {len(puzzle._solution_moves)} moves."
            )
        while puzzle._current_step < current_step:
            puzzle.make_opponent_move()

        puzzle.used_hint = used_hint
        puzzle.opponent_move_pending = opponent_move_pending and not puzzle.is_solved()
        # events from the replay are discarded
        puzzle.events.drain()
        return puzzle

    # --- DELEGATED BOARD SURFACE ---
    @property
    def events(self) -> EventQueue:
        return self.board.events

    @property
    def current_player(self) -> Color:
        return self.board.current_player

    def piece(self, square: Square) -> int:
        return self.board.piece(square)

    def get_piece(self, square: Square) -> int:
        return self.board.get_piece(square)

    def get_board(self) -> Grid:
        return self.board.get_board()

    def to_fen(self) -> str:
        return self.board.to_fen()

    # --- PUZZLE STATE ---
    @property
    def rating(self) -> int:
        return self._rating

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def solution_moves(self) -> tuple[Move, ...]:
        return tuple(self._solution_moves)

    @property
    def player_moves_total(self) -> int:
        """Every odd index of the solution is a move the player has to find"""
        return len(self._solution_moves) // 2

    @property
    def player_moves_made(self) -> int:
        return self._current_step // 2

    def is_solved(self) -> bool:
        return self._current_step >= len(self._solution_moves)

    # --- PARSING ---
    def load_fen(self, fen: str) -> None:
        """Piece placement + color to move. Replaces the entire board."""
        self.board.load_fen(fen)

    def load_moves(self, moves: str) -> None:
        """Space separated UCI moves, appended to the solution"""
        self._solution_moves.extend(Move.from_uci(uci) for uci in moves.split())

    def set_solution_moves(self, moves: list[Move]) -> None:
        """Replace the solution and start again from its first move"""
        self._solution_moves = list(moves)
        self._current_step = 0
        self.opponent_move_pending = False

    # --- PLAYING ---
    def make_opponent_move(self) -> None:
        """Play the next scripted move, no questions asked."""
        if self.is_solved():
            raise PuzzleStateError("Puzzle already solved: there is no move left to play.")

        move = self._solution_moves[self._current_step]
        logger.debug("Opponent moves %s", move)
        self.board.move_piece_unconditionally(move.from_square, move.to_square)
        self._current_step += 1
        self.opponent_move_pending = False

    def make_guess(self, from_square: Square, to_square: Square) -> bool:
        """
        The player's attempt at the next move of the solution.
        ---

        Wrong guesses (or guesses while the puzzle is solved, or while the opponent still has to reply)
        return False and leave everything as it was.
        """
        if self.is_solved():
            logger.debug("Puzzle already solved, ignoring guess")
            return False

        if self.opponent_move_pending:
            logger.debug("Waiting for the opponent's reply, ignoring guess")
            return False

        expected = self._solution_moves[self._current_step]
        guess = Move(from_square, to_square)
        if guess != expected:
            logger.debug("Wrong move %s (step %d)", guess, self._current_step)
            return False

        self.board.move_piece_unconditionally(from_square, to_square)
        self._current_step += 1
        logger.info(
            "Correct move %s (%d of %d)",
            guess,
            self.player_moves_made,
            self.player_moves_total,
        )

        if self.is_solved():
            logger.info("Puzzle %s solved", self.puzzle_id)
            self.events.emit(PuzzleBeaten())
        else:
            self.opponent_move_pending = True
            self.events.emit(OpponentMoveScheduled(self.opponent_delay))
        return True

    def peek_next_move(self) -> Move:
        """Check `is_solved()` first: a solved puzzle has no next move."""
        if self.is_solved():
            raise PuzzleStateError("Puzzle already solved: there is no next move.")
        return self._solution_moves[self._current_step]

    # --- HINTS ---
    def request_hint_move(self) -> Move | None:
        """Reveal the entire next move. Nothing is revealed while the opponent's reply is pending."""
        if self.opponent_move_pending:
            return None
        self.used_hint = True
        if self.is_solved():
            return None
        move = self._solution_moves[self._current_step]
        self.events.emit(HintMoveAvailable(move.from_square, move.to_square))
        return move

    def request_hint(self) -> Square | None:
        """Only reveal which piece has to move"""
        if self.opponent_move_pending:
            return None
        self.used_hint = True
        if self.is_solved():
            return None
        from_square = self._solution_moves[self._current_step].from_square
        self.events.emit(HintAvailable(from_square))
        return from_square
