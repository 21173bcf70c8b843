"""Unit tests for /src/puzzles/puzzle.py"""

import pytest

from src.chess.board import Board
from src.chess.events import (
    HintAvailable,
    HintMoveAvailable,
    OpponentMoveScheduled,
    PieceCaptured,
    PuzzleBeaten,
)
from src.chess.moves import Move
from src.chess.pieces import EMPTY, Color, PieceType
from src.chess.square import Square
from src.core.exceptions import InvalidPuzzleRecordError, PuzzleStateError
from src.puzzles.puzzle import ChessPuzzle


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


@pytest.fixture
def fork_puzzle(fork_record: str) -> ChessPuzzle:
    puzzle = ChessPuzzle.from_record(fork_record, opponent_delay=0.5)
    puzzle.events.drain()
    return puzzle


# -- CREATION ---
def test_from_record_plays_the_first_move(fork_record: str) -> None:
    puzzle = ChessPuzzle.from_record(fork_record)
    assert puzzle.current_step == 1
    assert puzzle.current_player == Color.WHITE
    assert puzzle.piece(sq("b8")) == -PieceType.ROOK
    assert puzzle.piece(sq("a8")) == EMPTY
    assert puzzle.rating == 1100
    assert puzzle.puzzle_id == "00002"
    assert "fork" in puzzle.themes
    assert puzzle.player_moves_total == 2
    assert puzzle.player_moves_made == 0
    assert not puzzle.opponent_move_pending


def test_malformed_record() -> None:
    with pytest.raises(InvalidPuzzleRecordError):
        ChessPuzzle.from_record("00001,8/8/8/8/8/8/8/8 w - - 0 1,e2e4")


def test_explicit_state_plays_nothing() -> None:
    board = Board.default().get_board()
    puzzle = ChessPuzzle(board=board, solution_moves=[Move.from_uci("e2e4")], rating=900)
    assert puzzle.current_step == 0
    assert puzzle.get_board() == board
    assert puzzle.rating == 900
    assert not puzzle.is_solved()


def test_puzzle_without_moves_is_solved() -> None:
    assert ChessPuzzle().is_solved()


def test_load_fen_and_moves() -> None:
    puzzle = ChessPuzzle()
    puzzle.load_fen("6k1/p4ppp/8/8/8/8/5PPP/3R2K1 b - - 0 1")
    puzzle.load_moves("a7a6  d1d8")
    assert puzzle.current_player == Color.BLACK
    assert puzzle.solution_moves == (Move.from_uci("a7a6"), Move.from_uci("d1d8"))
    assert puzzle.to_fen() == "6k1/p4ppp/8/8/8/8/5PPP/3R2K1 b"


def test_set_solution_moves_restarts() -> None:
    puzzle = ChessPuzzle(board=Board.default().get_board(), solution_moves=[Move.from_uci("e2e4")])
    puzzle.make_opponent_move()
    puzzle.set_solution_moves([Move.from_uci("e7e5"), Move.from_uci("g1f3")])
    assert puzzle.current_step == 0
    assert len(puzzle.solution_moves) == 2


# -- GUESSING ---
def test_correct_guess_schedules_the_reply(fork_puzzle: ChessPuzzle) -> None:
    assert fork_puzzle.make_guess(sq("d5"), sq("e7"))
    assert fork_puzzle.current_step == 2
    assert fork_puzzle.opponent_move_pending
    assert fork_puzzle.player_moves_made == 1
    assert fork_puzzle.events.drain()[-1] == OpponentMoveScheduled(0.5)


def test_wrong_guess_changes_nothing(fork_puzzle: ChessPuzzle) -> None:
    before = fork_puzzle.get_board()
    assert not fork_puzzle.make_guess(sq("d5"), sq("f6"))
    assert fork_puzzle.get_board() == before
    assert fork_puzzle.current_step == 1
    assert fork_puzzle.events.drain() == []


def test_guess_is_not_checked_against_movement_rules(fork_puzzle: ChessPuzzle) -> None:
    """Only the solution decides: a legal but different move is still wrong"""
    assert not fork_puzzle.make_guess(sq("g1"), sq("h1"))


def test_no_guessing_while_the_reply_is_pending(fork_puzzle: ChessPuzzle) -> None:
    fork_puzzle.make_guess(sq("d5"), sq("e7"))
    # the reply (g8f8) is not the player's move, and neither is anything else
    assert not fork_puzzle.make_guess(sq("g8"), sq("f8"))
    assert not fork_puzzle.make_guess(sq("e7"), sq("c8"))
    assert fork_puzzle.current_step == 2


def test_solving_the_puzzle(fork_puzzle: ChessPuzzle) -> None:
    assert fork_puzzle.make_guess(sq("d5"), sq("e7"))
    fork_puzzle.make_opponent_move()
    assert fork_puzzle.current_step == 3
    assert not fork_puzzle.opponent_move_pending
    fork_puzzle.events.drain()

    assert fork_puzzle.make_guess(sq("e7"), sq("c8"))
    assert fork_puzzle.is_solved()
    assert not fork_puzzle.opponent_move_pending
    events = fork_puzzle.events.drain()
    assert isinstance(events[0], PieceCaptured)
    assert events[-1] == PuzzleBeaten()
    assert not any(isinstance(event, OpponentMoveScheduled) for event in events)


def test_mate_in_one(mate_in_one_record: str) -> None:
    puzzle = ChessPuzzle.from_record(mate_in_one_record)
    assert puzzle.make_guess(sq("d1"), sq("d8"))
    assert puzzle.is_solved()
    assert PuzzleBeaten() in puzzle.events.drain()


def test_guessing_a_solved_puzzle(mate_in_one_record: str) -> None:
    puzzle = ChessPuzzle.from_record(mate_in_one_record)
    puzzle.make_guess(sq("d1"), sq("d8"))
    assert not puzzle.make_guess(sq("d8"), sq("d7"))


def test_no_moves_left_on_a_solved_puzzle(mate_in_one_record: str) -> None:
    puzzle = ChessPuzzle.from_record(mate_in_one_record)
    puzzle.make_guess(sq("d1"), sq("d8"))
    with pytest.raises(PuzzleStateError):
        puzzle.peek_next_move()
    with pytest.raises(PuzzleStateError):
        puzzle.make_opponent_move()


def test_peek_does_not_change_anything(fork_puzzle: ChessPuzzle) -> None:
    assert fork_puzzle.peek_next_move() == Move.from_uci("d5e7")
    assert fork_puzzle.current_step == 1
    assert not fork_puzzle.used_hint


# -- HINTS ---
def test_hint_reveals_the_piece(fork_puzzle: ChessPuzzle) -> None:
    assert fork_puzzle.request_hint() == sq("d5")
    assert fork_puzzle.used_hint
    assert fork_puzzle.events.drain() == [HintAvailable(sq("d5"))]


def test_hint_reveals_the_move(fork_puzzle: ChessPuzzle) -> None:
    assert fork_puzzle.request_hint_move() == Move.from_uci("d5e7")
    assert fork_puzzle.used_hint
    assert fork_puzzle.events.drain() == [HintMoveAvailable(sq("d5"), sq("e7"))]


def test_hint_on_a_solved_puzzle(mate_in_one_record: str) -> None:
    puzzle = ChessPuzzle.from_record(mate_in_one_record)
    puzzle.make_guess(sq("d1"), sq("d8"))
    puzzle.events.drain()
    assert puzzle.request_hint() is None
    assert puzzle.request_hint_move() is None
    assert puzzle.events.drain() == []



def test_no_hint_while_the_reply_is_pending(fork_puzzle: ChessPuzzle) -> None:
    """The next scripted move is the opponent's: nothing to reveal, and no hint gets counted"""
    fork_puzzle.make_guess(sq("d5"), sq("e7"))
    fork_puzzle.events.drain()

    assert fork_puzzle.request_hint_move() is None
    assert fork_puzzle.request_hint() is None
    assert not fork_puzzle.used_hint
    assert fork_puzzle.events.drain() == []

    fork_puzzle.make_opponent_move()
    assert fork_puzzle.request_hint() == sq("e7")
    assert fork_puzzle.used_hint

# -- RESUMING ---
def test_resume_replays_the_solution(fork_record: str) -> None:
    puzzle = ChessPuzzle.resume(fork_record, current_step=3, used_hint=True)
    assert puzzle.current_step == 3
    assert puzzle.used_hint
    assert puzzle.piece(sq("f8")) == -PieceType.KING
    assert puzzle.piece(sq("e7")) == PieceType.KNIGHT
    assert puzzle.current_player == Color.WHITE
    assert puzzle.events.drain() == []


def test_resume_with_a_pending_reply(fork_record: str) -> None:
    puzzle = ChessPuzzle.resume(fork_record, current_step=2, opponent_move_pending=True)
    assert puzzle.opponent_move_pending
    puzzle.make_opponent_move()
    assert puzzle.current_step == 3


def test_resume_beyond_the_solution(fork_record: str) -> None:
    with pytest.raises(PuzzleStateError):
        ChessPuzzle.resume(fork_record, current_step=5)
