"""Unit tests for src/chess/fen.py"""

import pytest

from src.chess.fen import (
    STARTING_FEN,
    is_valid_position,
    parse_color,
    parse_fen,
    parse_placement,
    placement_to_fen,
    to_fen,
)
from src.chess.pieces import EMPTY, Color, PieceType, make_piece
from src.core.exceptions import InvalidFENError


def test_starting_position() -> None:
    grid, color = parse_fen(STARTING_FEN)
    assert color == Color.WHITE
    assert grid[0] == [-2, -3, -4, -5, -6, -4, -3, -2]
    assert grid[1] == [-1] * 8
    for row in range(2, 6):
        assert grid[row] == [EMPTY] * 8
    assert grid[6] == [1] * 8
    assert grid[7] == [2, 3, 4, 5, 6, 4, 3, 2]


def test_digits_skip_squares() -> None:
    grid = parse_placement("8/8/8/3q4/8/8/8/8")
    assert grid[3][3] == make_piece(Color.BLACK, PieceType.QUEEN)
    assert sum(abs(piece) for row in grid for piece in row) == PieceType.QUEEN


@pytest.mark.parametrize(
    "fen",
    [
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w",
        "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1 b",
        "8/8/8/8/8/8/8/8 w",
    ],
)
def test_fen_parsing_roundtrip(fen: str) -> None:
    """Only the placement and the color to move are written back"""
    grid, color = parse_fen(fen)
    assert to_fen(grid, color) == fen


def test_further_fields_are_ignored() -> None:
    grid, color = parse_fen("8/8/8/8/8/8/8/4K3 b KQkq e3 12 40")
    assert color == Color.BLACK
    assert placement_to_fen(grid) == "8/8/8/8/8/8/8/4K3"


@pytest.mark.parametrize(
    "active_color, expected",
    [("w", Color.WHITE), ("b", Color.BLACK), ("x", Color.WHITE)],
)
def test_color_to_move(active_color: str, expected: Color) -> None:
    assert parse_color(active_color) == expected


@pytest.mark.parametrize(
    "position",
    [
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",
        "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1",
        "8/8/8/8/8/8/8/8",
    ],
)
def test_valid_position(position: str) -> None:
    assert is_valid_position(position)


@pytest.mark.parametrize(
    "position",
    [
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR/RNBQKBNR",  # an additional rank
        "rnbqkbnr/pppppppp/8/",  # not enough ranks
        "rnbqkbnr/pppppppp/6/23/42/34/PPPPPPPP/RNBQKBNR",  # empty squares exceed number of files
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNRRRR",  # number of pieces in the rank exceeds number of files
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/WRTYUIOM",  # bogus codes for the pieces
        "rn@q#bnr/p-ppp-pp/8/8/8/8/PPPPPPPP/RNBQKBNR",  # bogus characters for the pieces
    ],
)
def test_invalid_position(position: str) -> None:
    """Check these bogus positions are invalid"""
    assert not is_valid_position(position)
    with pytest.raises(InvalidFENError):
        parse_placement(position)


def test_missing_color_to_move() -> None:
    with pytest.raises(InvalidFENError):
        parse_fen("8/8/8/8/8/8/8/8")
