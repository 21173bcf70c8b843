"""
A single puzzle from the Lichess puzzle database (CSV).

Columns:
PuzzleId,FEN,Moves,Rating,RatingDeviation,Popularity,NbPlays,Themes,GameUrl,OpeningTags

* FEN is the position BEFORE the opponent's move
* Moves is the full solution in UCI notation, space separated. The first move is the opponent's, after that moves alternate.
"""

from dataclasses import dataclass, field
from typing import Self

from src.core.exceptions import InvalidPuzzleRecordError

MIN_RECORD_FIELDS = 9
PUZZLE_ID_FIELD = 0
FEN_FIELD = 1
MOVES_FIELD = 2
RATING_FIELD = 3
THEMES_FIELD = 7
GAME_URL_FIELD = 8


@dataclass
class PuzzleRecord:
    puzzle_id: str
    fen: str
    moves: list[str]
    rating: int
    themes: list[str] = field(default_factory=list)
    game_url: str = ""
    line: str = ""

    @classmethod
    def from_csv_line(cls, line: str) -> Self:
        parts = line.strip().split(",")
        if len(parts) < MIN_RECORD_FIELDS:
            raise InvalidPuzzleRecordError(
                f"Puzzle record needs at least {MIN_RECORD_FIELDS} comma separated fields, got {len(parts)}: {line!r}"
            )

        try:
            rating = int(parts[RATING_FIELD])
        except ValueError as exc:
            raise InvalidPuzzleRecordError(
                f"Puzzle rating {parts[RATING_FIELD]!r} is not a number."
            ) from exc

        return cls(
            puzzle_id=parts[PUZZLE_ID_FIELD],
            fen=parts[FEN_FIELD],
            moves=parts[MOVES_FIELD].split(),
            rating=rating,
            themes=parts[THEMES_FIELD].split(),
            game_url=parts[GAME_URL_FIELD],
            line=line.strip(),
        )


def is_playable(line: str) -> bool:
    """
    Can this puzzle be played with the rules this engine knows?
    ---

    * no castling rights left in the position (castling field of the FEN is "-")
    * the solution does not rely on en passant
    * no promotions in the solution (those moves have a 5th character)
    * at least one move left for the player after the opponent's first move
    """
    parts = line.strip().split(",")
    if len(parts) <= THEMES_FIELD:
        return False

    fen_fields = parts[FEN_FIELD].split()
    if len(fen_fields) < 3 or fen_fields[2] != "-":
        return False

    if "enpassant" in parts[THEMES_FIELD].lower():
        return False

    moves = parts[MOVES_FIELD].split()
    if len(moves) < 2:
        return False

    if any(len(move) != 4 for move in moves):
        return False

    return True
