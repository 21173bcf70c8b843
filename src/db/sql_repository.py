"""Implementation of the repositories using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel, PuzzleModel
from src.db.schema import DBGame, DBPuzzle


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            position_fen=game.position_fen,
            moves_uci=game.moves_uci,
            status=game.status,
            winner=game.winner,
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_db.position_fen = game.position_fen
        # new list: JSON columns do not track in-place mutation
        game_db.moves_uci = list(game.moves_uci)
        game_db.status = game.status
        game_db.winner = game.winner
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            position_fen=game_db.position_fen,
            moves_uci=list(game_db.moves_uci),
            status=game_db.status,
            winner=game_db.winner,
        )


class SQLPuzzleRepository:
    """Puzzle sessions stored using SQL"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_puzzle(self, session_id: UUID) -> PuzzleModel | None:
        puzzle_db = self._fetch_puzzle(session_id)
        if puzzle_db:
            return self._to_model(puzzle_db)
        return None

    def create_puzzle(self, puzzle: PuzzleModel) -> tuple[PuzzleModel, UUID]:
        new_id = uuid4()
        puzzle_db = DBPuzzle(
            id=new_id,
            record=puzzle.record,
            position_fen=puzzle.position_fen,
            current_step=puzzle.current_step,
            player_rating=puzzle.player_rating,
            used_hint=puzzle.used_hint,
            opponent_move_pending=puzzle.opponent_move_pending,
            rating_awarded=puzzle.rating_awarded,
        )
        self.db.add(puzzle_db)
        self.db.commit()
        self.db.refresh(puzzle_db)
        return self._to_model(puzzle_db), new_id

    def update_puzzle(
        self, session_id: UUID, puzzle: PuzzleModel
    ) -> PuzzleModel | None:
        puzzle_db = self._fetch_puzzle(session_id)
        if not puzzle_db:
            return None
        puzzle_db.position_fen = puzzle.position_fen
        puzzle_db.current_step = puzzle.current_step
        puzzle_db.player_rating = puzzle.player_rating
        puzzle_db.used_hint = puzzle.used_hint
        puzzle_db.opponent_move_pending = puzzle.opponent_move_pending
        puzzle_db.rating_awarded = puzzle.rating_awarded
        self.db.commit()
        self.db.refresh(puzzle_db)
        return self._to_model(puzzle_db)

    def delete_puzzle(self, session_id: UUID) -> PuzzleModel | None:
        puzzle_db = self._fetch_puzzle(session_id)
        if not puzzle_db:
            return None
        puzzle_model = self._to_model(puzzle_db)
        self.db.delete(puzzle_db)
        self.db.commit()
        return puzzle_model

    def _fetch_puzzle(self, session_id: UUID) -> DBPuzzle | None:
        query = select(DBPuzzle).where(DBPuzzle.id == session_id)
        return self.db.scalar(query)

    def _to_model(self, puzzle_db: DBPuzzle) -> PuzzleModel:
        return PuzzleModel(
            record=puzzle_db.record,
            position_fen=puzzle_db.position_fen,
            current_step=puzzle_db.current_step,
            player_rating=puzzle_db.player_rating,
            used_hint=puzzle_db.used_hint,
            opponent_move_pending=puzzle_db.opponent_move_pending,
            rating_awarded=puzzle_db.rating_awarded,
        )
