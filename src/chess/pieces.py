"""
Defines the types of chess pieces

A piece on the board is a signed integer ("piece code"):
* the magnitude is the PieceType
* the sign is the Color (positive: white, negative: black)
* 0 is an empty square

This makes `piece * color > 0` the test for "this piece belongs to color".
"""

from enum import IntEnum

EMPTY = 0


class PieceType(IntEnum):
    PAWN = 1
    ROOK = 2
    KNIGHT = 3
    BISHOP = 4
    QUEEN = 5
    KING = 6


class Color(IntEnum):
    WHITE = 1
    BLACK = -1

    @property
    def opponent(self) -> "Color":
        return Color(-self.value)


FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


def make_piece(color: Color, piece_type: PieceType) -> int:
    return int(color) * int(piece_type)


def piece_type(piece: int) -> PieceType | None:
    """None for an empty square"""
    return PieceType(abs(piece)) if piece != EMPTY else None


def piece_color(piece: int) -> Color | None:
    """None for an empty square"""
    if piece == EMPTY:
        return None
    return Color.WHITE if piece > 0 else Color.BLACK


def is_owned_by(piece: int, color: Color) -> bool:
    return piece * color > 0


def is_enemy(piece: int, color: Color) -> bool:
    return piece * color < 0


def piece_from_fen(character: str) -> int:
    """lower case: Black pieces, upper case: White pieces"""
    color = Color.WHITE if character.isupper() else Color.BLACK
    return make_piece(color, FEN_TO_PIECE[character.lower()])


def piece_to_fen(piece: int) -> str:
    fen_char = PIECE_TO_FEN[PieceType(abs(piece))]
    return fen_char.upper() if piece > 0 else fen_char
