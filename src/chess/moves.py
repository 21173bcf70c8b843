"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define a legality check for each piece type.

NOTE: These are movement rules only. Whether a move leaves your king in check is never considered,
and castling / en passant / promotion do not exist in this rule set.
"""

from dataclasses import dataclass
from typing import Callable, Protocol, Self

from src.chess.pieces import PieceType, is_enemy, piece_color
from src.chess.square import Square
from src.core.exceptions import InvalidSquareError

# home ranks (as row index) from where pawns may advance two squares
WHITE_PAWN_ROW = 6
BLACK_PAWN_ROW = 1


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece(self, square: Square) -> int: ...


Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface:
        ---
        One of the standard chess notations for moves: <from_square><to_square>

        example:
        * "e2e4": move the piece that was on e2 to e4
        """
        if len(uci) != 4:
            raise InvalidSquareError(
                f"Move: {uci!r} needs to be 4 characters: <from><to> (Ex: e2e4)"
            )
        return cls(Square.from_algebraic(uci[:2]), Square.from_algebraic(uci[2:]))

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @property
    def delta(self) -> Vector:
        """(row offset, column offset) from start to target"""
        return (
            self.to_square.row - self.from_square.row,
            self.to_square.col - self.from_square.col,
        )

    def __str__(self) -> str:
        return self.to_uci()


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# --- PATH CHECKING ---
def is_piece_interrupting(step: Vector, move: Move, board: Board) -> bool:
    """
    Walk from the starting square towards the target square, one step at a time.
    ---

    Returns TRUE as soon as an occupied square is found before reaching the target.
    The target square itself is never checked: what stands there is the caller's concern.

    NOTE: `move` must lie on the line defined by `step`, otherwise the walk leaves the board.
    """
    dr, dc = step
    current = move.from_square.offset(dr, dc)
    while current != move.to_square:
        if board.piece(current):
            return True
        current = current.offset(dr, dc)
    return False


# --- MOVEMENT RULES ---
def is_legal_king_move(move: Move, board: Board) -> bool:
    """The king can move by a single square at the time, in any direction."""
    dr, dc = move.delta
    return max(abs(dr), abs(dc)) == 1


def is_legal_knight_move(move: Move, board: Board) -> bool:
    """Knights always move such that |delta_row| + |delta_col| = 3 (and never in a straight line)"""
    knight_deltas: list[Vector] = [
        (-2, 1),
        (-2, -1),
        (-1, 2),
        (-1, -2),
        (1, -2),
        (1, 2),
        (2, 1),
        (2, -1),
    ]
    return move.delta in knight_deltas


def is_legal_rook_move(move: Move, board: Board) -> bool:
    """Rooks move either horizontally or vertically, and cannot jump over other pieces"""
    dr, dc = move.delta
    if not ((dr == 0) ^ (dc == 0)):
        return False
    return not is_piece_interrupting((_sign(dr), _sign(dc)), move, board)


def is_legal_bishop_move(move: Move, board: Board) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|, and cannot jump over other pieces"""
    dr, dc = move.delta
    if dr == 0 or abs(dr) != abs(dc):
        return False
    return not is_piece_interrupting((_sign(dr), _sign(dc)), move, board)


def is_legal_queen_move(move: Move, board: Board) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return is_legal_rook_move(move, board) or is_legal_bishop_move(move, board)


def is_legal_pawn_move(move: Move, board: Board) -> bool:
    """
    A pawn:
    - never moves backwards. White moves UP the board (decreasing row), black moves DOWN.
    - takes diagonally, one square forward. Only allowed if there is an enemy piece to take.
    - can move by two in their first move (so when on their home rank), if nothing is in the way.
    - moves by a single square forward.

    NOTE: the single square push does not look at the target square.
    Standing on your own piece is already blocked before this rule is called, an enemy piece straight ahead is NOT.
    """
    color = piece_color(board.piece(move.from_square))
    if color is None:
        return False
    forward = -int(color)
    dr, dc = move.delta

    if dr * forward < 0:
        return False

    if abs(dc) == 1 and dr == forward:
        return is_enemy(board.piece(move.to_square), color)

    if dc == 0 and dr == 2 * forward:
        home_row = WHITE_PAWN_ROW if forward < 0 else BLACK_PAWN_ROW
        if move.from_square.row != home_row:
            return False
        return not is_piece_interrupting((forward, 0), move, board)

    if dc == 0 and dr == forward:
        return True

    return False


# -- STRATEGY PATTERN: MOVEMENT RULES ---
IsLegalMoveFn = Callable[[Move, Board], bool]
MOVEMENT_RULES: dict[PieceType, IsLegalMoveFn] = {
    PieceType.PAWN: is_legal_pawn_move,
    PieceType.KNIGHT: is_legal_knight_move,
    PieceType.BISHOP: is_legal_bishop_move,
    PieceType.ROOK: is_legal_rook_move,
    PieceType.QUEEN: is_legal_queen_move,
    PieceType.KING: is_legal_king_move,
}
