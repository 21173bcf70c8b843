"""Picking puzzles from a CSV export of the Lichess puzzle database"""

import logging
import random
from pathlib import Path

from src.core.exceptions import PuzzleLibraryError
from src.puzzles.record import is_playable

logger = logging.getLogger(__name__)

MAX_TRIES = 500
HEADER_PREFIX = "PuzzleId"


class PuzzleLibrary:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def lines(self) -> list[str]:
        """All non-empty lines of the file (header excluded)"""
        if not self.path.is_file():
            raise PuzzleLibraryError(f"Puzzle file not found: {self.path}")
        with self.path.open(encoding="utf-8") as f:
            stripped = (line.strip() for line in f)
            return [
                line
                for line in stripped
                if line and not line.startswith(HEADER_PREFIX)
            ]

    def random_line(self, rng: random.Random | None = None) -> str:
        lines = self.lines()
        if not lines:
            raise PuzzleLibraryError(f"Puzzle file is empty: {self.path}")
        return (rng or random).choice(lines)

    def random_playable_line(
        self, rng: random.Random | None = None, max_tries: int = MAX_TRIES
    ) -> str:
        """Keep drawing until a puzzle comes up that only needs the rules this engine knows."""
        lines = self.lines()
        if not lines:
            raise PuzzleLibraryError(f"Puzzle file is empty: {self.path}")

        chooser = rng or random
        for attempt in range(max_tries):
            line = chooser.choice(lines)
            if is_playable(line):
                logger.debug("Picked playable puzzle after %d draw(s)", attempt + 1)
                return line
        raise PuzzleLibraryError(
            f"No playable puzzle found in {self.path} after {max_tries} tries."
        )
