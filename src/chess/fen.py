"""
Reading / writing the parts of a FEN string this engine understands: the piece placement and the color to move.

ex) The standard starting position has a FEN
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1

Castling rights, en passant square and the move counters (fields 3-6) are accepted but ignored:
those rules are not part of this engine.
"""

from src.chess.pieces import EMPTY, FEN_TO_PIECE, Color, piece_from_fen, piece_to_fen
from src.chess.square import BOARD_DIMENSIONS
from src.core.exceptions import InvalidFENError

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

Grid = list[list[int]]
DIGITS = "0123456789"


def empty_grid() -> Grid:
    num_rows, num_cols = BOARD_DIMENSIONS
    return [[EMPTY] * num_cols for _ in range(num_rows)]


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_rows, num_cols = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_rows:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            if character in DIGITS:
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_cols:
            return False
    return True


def parse_placement(position: str) -> Grid:
    """
    Placement string -> 8x8 grid of piece codes.

    Read from the top rank (row 0) to the bottom rank (row 7), and each rank from the a-file onwards:
    * '/' goes to the next rank
    * a digit skips that many empty squares
    * a letter places a piece (capital letters: white, small letters: black)
    """
    if not is_valid_position(position):
        raise InvalidFENError(f"Cannot interpret {position!r} as a piece placement.")

    grid = empty_grid()
    row, col = 0, 0
    for character in position:
        if character == "/":
            row += 1
            col = 0
        elif character in DIGITS:
            col += int(character)
        else:
            grid[row][col] = piece_from_fen(character)
            col += 1
    return grid


def parse_color(active_color: str) -> Color:
    """'b' means black to move. Anything else is read as white."""
    return Color.BLACK if active_color == "b" else Color.WHITE


def parse_fen(fen: str) -> tuple[Grid, Color]:
    """Parse the placement and the color to move. Any further fields are ignored."""
    parts = fen.split()
    if len(parts) < 2:
        raise InvalidFENError(
            f"FEN {fen!r} needs at least a piece placement and a color to move."
        )
    return parse_placement(parts[0]), parse_color(parts[1])


def placement_to_fen(grid: Grid) -> str:
    """Ranks are separated by slashes in FEN string."""
    return "/".join(_rank_to_fen(rank) for rank in grid)


def _rank_to_fen(rank: list[int]) -> str:
    """FEN string of a single rank"""
    fen_characters: list[str] = []
    empty_count = 0
    for piece in rank:
        if piece != EMPTY:
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece_to_fen(piece))
        else:
            empty_count += 1

    # if the entire rank is empty, then we still place this number in the string
    if empty_count > 0:
        fen_characters.append(str(empty_count))
    return "".join(fen_characters)


def to_fen(grid: Grid, color_to_move: Color) -> str:
    active_color = "w" if color_to_move == Color.WHITE else "b"
    return f"{placement_to_fen(grid)} {active_color}"
