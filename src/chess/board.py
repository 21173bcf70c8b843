"""The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

import logging
from copy import deepcopy
from typing import Self

from src.chess.events import (
    BoardChanged,
    EventQueue,
    GameWon,
    MovePlayed,
    PieceCaptured,
    PlayerChanged,
)
from src.chess.fen import STARTING_FEN, Grid, empty_grid, parse_fen, parse_placement, to_fen
from src.chess.moves import MOVEMENT_RULES, Move
from src.chess.pieces import (
    EMPTY,
    Color,
    PieceType,
    is_owned_by,
    make_piece,
    piece_color,
    piece_to_fen,
)
from src.chess.square import BOARD_DIMENSIONS, FILE_NAMES, Square
from src.core.exceptions import InvalidBoardError

logger = logging.getLogger(__name__)

# particle hint sent along with every capture
CAPTURE_PARTICLE_COUNT = 30


class Board:
    """
    The move engine
    ---

    Owns the 8x8 grid of piece codes and whose turn it is.
    The grid only changes through the setup methods (clear/load/add) and through `move_piece_unconditionally()`.
    """

    def __init__(self, events: EventQueue | None = None) -> None:
        self._grid: Grid = empty_grid()
        self.current_player = Color.WHITE
        self.events = events if events is not None else EventQueue()

    @classmethod
    def default(cls) -> Self:
        board = cls()
        board.load_default_board()
        return board

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Placement + color to move. (Further FEN fields are ignored)"""
        board = cls()
        board.load_fen(fen)
        return board

    # --- SETUP (no legality checks) ---
    def clear_board(self) -> None:
        self._grid = empty_grid()

    def load_default_board(self) -> None:
        """Black on top (row 0 = 8th rank), white on the bottom"""
        self._grid = parse_placement(STARTING_FEN.split(" ")[0])
        self.current_player = Color.WHITE

    def load_board(self, matrix: Grid) -> None:
        """Replace the whole board. Piece counts, kings etc. are not validated, only the dimensions."""
        num_rows, num_cols = BOARD_DIMENSIONS
        if len(matrix) != num_rows or any(len(row) != num_cols for row in matrix):
            raise InvalidBoardError(
                f"Board needs to be {num_rows}x{num_cols} to be loaded."
            )
        self._grid = [[int(piece) for piece in row] for row in matrix]

    def load_fen(self, fen: str) -> None:
        self._grid, self.current_player = parse_fen(fen)

    def add_piece(self, color: Color, piece_type: PieceType, square: Square) -> None:
        """Place a piece, overwriting whatever was standing there."""
        self._grid[square.row][square.col] = make_piece(color, piece_type)

    # --- QUERIES ---
    def piece(self, square: Square) -> int:
        return self._grid[square.row][square.col]

    def get_piece(self, square: Square) -> int:
        return self.piece(square)

    def get_board(self) -> Grid:
        """A copy: callers can never change the board through the returned grid."""
        return deepcopy(self._grid)

    def to_fen(self) -> str:
        return to_fen(self._grid, self.current_player)

    def render(self) -> str:
        """Text diagram of the board, white pieces in capitals."""
        lines = ["   " + "  ".join(FILE_NAMES), "-" * 25]
        for row_idx, row in enumerate(self._grid):
            cells = [piece_to_fen(piece) if piece != EMPTY else "." for piece in row]
            lines.append(f"{BOARD_DIMENSIONS[0] - row_idx}| " + "  ".join(cells))
        return "\n".join(lines)

    # --- PLAYING ---
    def move_piece(self, from_square: Square, to_square: Square) -> bool:
        """
        Attempt to make a move
        -----

        1. The piece must belong to the player whose turn it is
        2. The piece must actually move
        3. You cannot take your own piece
        4. The move must follow the movement rule of the piece

        Rejections are part of normal play, so nothing gets raised: returns False and nothing changes.
        """
        piece = self.piece(from_square)
        move = Move(from_square, to_square)

        if not is_owned_by(piece, self.current_player):
            logger.debug("Rejected %s: piece %d is not owned by %s", move, piece, self.current_player.name)
            return False

        if from_square == to_square:
            logger.debug("Rejected %s: piece did not move", move)
            return False

        if is_owned_by(self.piece(to_square), self.current_player):
            logger.debug("Rejected %s: cannot take your own piece", move)
            return False

        movement_rule = MOVEMENT_RULES[PieceType(abs(piece))]
        if not movement_rule(move, self):
            logger.debug("Rejected %s: illegal %s move", move, PieceType(abs(piece)).name.lower())
            return False

        self.move_piece_unconditionally(from_square, to_square)
        return True

    def move_piece_unconditionally(self, from_square: Square, to_square: Square) -> None:
        """
        Update the position on the board. Legality has already been established (or is not required, ex. scripted moves)
        ---

        1. Taking a piece announces the capture (and the win, if it was a king)
        2. Move the piece
        3. Switch the player to move
        """
        moving_piece = self.piece(from_square)
        captured_piece = self.piece(to_square)
        is_capture = captured_piece != EMPTY and moving_piece != EMPTY

        if is_capture:
            self.events.emit(
                PieceCaptured(
                    square=to_square,
                    x=to_square.col + 0.5,
                    y=BOARD_DIMENSIONS[0] - to_square.row - 0.5,
                    count=CAPTURE_PARTICLE_COUNT,
                )
            )

        self._grid[to_square.row][to_square.col] = moving_piece
        self._grid[from_square.row][from_square.col] = EMPTY
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Moved %s -> %s\n%s", from_square, to_square, self.render())

        mover = self.current_player
        self._switch_player()
        self.events.emit(MovePlayed(from_square, to_square))

        if is_capture and abs(captured_piece) == PieceType.KING:
            winner = piece_color(moving_piece) or mover
            logger.info("King captured on %s, %s wins", to_square, winner.name.lower())
            self.events.emit(GameWon(winner))

        self.events.emit(BoardChanged())

    def _switch_player(self) -> None:
        self.current_player = self.current_player.opponent
        self.events.emit(PlayerChanged(self.current_player))
