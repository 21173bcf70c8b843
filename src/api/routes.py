"""HTTP routes. Each route builds a request model and hands it to the matching service."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.models import (
    AdvanceRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    GetPuzzleRequest,
    GuessRequest,
    GuessResponse,
    HintRequest,
    HintResponse,
    MoveBody,
    MoveRequest,
    MoveResponse,
    PuzzleResponse,
    StartPuzzleRequest,
)
from src.core.config import Settings, get_settings
from src.db.database import get_db
from src.db.sql_repository import SQLGameRepository, SQLPuzzleRepository
from src.puzzles.library import PuzzleLibrary
from src.services.chess_service import ChessService
from src.services.puzzle_service import PuzzleService

router = APIRouter()


def get_chess_service(db: Annotated[Session, Depends(get_db)]) -> ChessService:
    return ChessService(SQLGameRepository(db))


def get_puzzle_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> PuzzleService:
    return PuzzleService(
        SQLPuzzleRepository(db),
        library=PuzzleLibrary(settings.puzzle_csv_path),
        settings=settings,
    )


ChessServiceDep = Annotated[ChessService, Depends(get_chess_service)]
PuzzleServiceDep = Annotated[PuzzleService, Depends(get_puzzle_service)]


# --- FREE PLAY ---
@router.post("/games", response_model=GameResponse, status_code=status.HTTP_201_CREATED)
def create_game(request: CreateGameRequest, service: ChessServiceDep) -> GameResponse:
    return service.create_new_game(request)


@router.get("/games/{game_id}", response_model=GameResponse)
def get_game(game_id: UUID, service: ChessServiceDep) -> GameResponse:
    return service.get_game_state(GetGameRequest(game_id=game_id))


@router.post("/games/{game_id}/moves", response_model=MoveResponse)
def make_move(game_id: UUID, body: MoveBody, service: ChessServiceDep) -> MoveResponse:
    return service.make_move(MoveRequest(game_id=game_id, **body.model_dump()))


@router.delete("/games/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(game_id: UUID, service: ChessServiceDep) -> None:
    service.delete_game(DeleteGameRequest(game_id=game_id))


# --- PUZZLES ---
@router.post(
    "/puzzles", response_model=PuzzleResponse, status_code=status.HTTP_201_CREATED
)
def start_puzzle(
    request: StartPuzzleRequest, service: PuzzleServiceDep
) -> PuzzleResponse:
    return service.start_puzzle(request)


@router.get("/puzzles/{session_id}", response_model=PuzzleResponse)
def get_puzzle(session_id: UUID, service: PuzzleServiceDep) -> PuzzleResponse:
    return service.get_puzzle_state(GetPuzzleRequest(session_id=session_id))


@router.post("/puzzles/{session_id}/guesses", response_model=GuessResponse)
def make_guess(
    session_id: UUID, body: MoveBody, service: PuzzleServiceDep
) -> GuessResponse:
    return service.make_guess(GuessRequest(session_id=session_id, **body.model_dump()))


@router.post("/puzzles/{session_id}/opponent-move", response_model=PuzzleResponse)
def opponent_move(session_id: UUID, service: PuzzleServiceDep) -> PuzzleResponse:
    return service.advance(AdvanceRequest(session_id=session_id))


@router.post("/puzzles/{session_id}/hint", response_model=HintResponse)
def hint(
    session_id: UUID, service: PuzzleServiceDep, full_move: bool = False
) -> HintResponse:
    return service.hint(HintRequest(session_id=session_id, full_move=full_move))


@router.post("/puzzles/{session_id}/solution-step", response_model=PuzzleResponse)
def solution_step(session_id: UUID, service: PuzzleServiceDep) -> PuzzleResponse:
    return service.play_solution_step(AdvanceRequest(session_id=session_id))


@router.delete("/puzzles/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_puzzle(session_id: UUID, service: PuzzleServiceDep) -> None:
    service.delete_puzzle(GetPuzzleRequest(session_id=session_id))
