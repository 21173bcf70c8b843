"""Protocol repositories (implemented with SQL Alchemy, tests use an in-memory version)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel, PuzzleModel


class GameRepository(Protocol):
    """Persistence layer orchestration for free-play games"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        ...


class PuzzleRepository(Protocol):
    """Persistence layer orchestration for puzzle sessions"""

    def get_puzzle(self, session_id: UUID) -> PuzzleModel | None: ...

    def create_puzzle(self, puzzle: PuzzleModel) -> tuple[PuzzleModel, UUID]: ...

    def update_puzzle(
        self, session_id: UUID, puzzle: PuzzleModel
    ) -> PuzzleModel | None: ...

    def delete_puzzle(self, session_id: UUID) -> PuzzleModel | None: ...
