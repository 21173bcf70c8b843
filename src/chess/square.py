"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import InvalidSquareError

# Chess board is always 8x8 (rows, cols)
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = "abcdefgh"
RANK_NAMES = "12345678"


@dataclass(frozen=True)
class Square:
    """
    Row/column coordinate on the board.

    Row 0 is the 8th rank (top of the board as seen by white), row 7 the 1st rank.
    Column 0 is the a-file.
    """

    row: int
    col: int

    def __post_init__(self) -> None:
        num_rows, num_cols = BOARD_DIMENSIONS
        if not (0 <= self.row < num_rows and 0 <= self.col < num_cols):
            raise InvalidSquareError(
                f"Square at row: {self.row}, col: {self.col} is outside of the board."
            )

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' -> (0, 0), 'h1' -> (7, 7). The file letter is case-insensitive."""
        if len(sq) != 2:
            raise InvalidSquareError(
                f"Square: {sq!r} needs to be a length of 2. (Ex: h2, H2)"
            )
        file_char, rank_char = sq[0].lower(), sq[1]
        if file_char not in FILE_NAMES:
            raise InvalidSquareError(
                f"Square: {sq!r} can only have a letter of a-h. (Ex: h2, H2)"
            )
        if rank_char not in RANK_NAMES:
            raise InvalidSquareError(
                f"Square: {sq!r} can only have a number of 1-8. (Ex: h2, H2)"
            )
        row = BOARD_DIMENSIONS[0] - int(rank_char)
        col = FILE_NAMES.index(file_char)
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.col]}{BOARD_DIMENSIONS[0] - self.row}"

    def offset(self, row_offset: int, col_offset: int) -> Square:
        """New square shifted by the given offsets. Raises if that would leave the board."""
        return Square(self.row + row_offset, self.col + col_offset)

    def __str__(self) -> str:
        return self.to_algebraic()
