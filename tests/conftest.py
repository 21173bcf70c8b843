"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from collections.abc import Iterator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

# Lichess style records (the header order is PuzzleId,FEN,Moves,Rating,RatingDeviation,Popularity,NbPlays,Themes,GameUrl,OpeningTags)
MATE_IN_ONE_RECORD = "00001,6k1/p4ppp/8/8/8/8/5PPP/3R2K1 b - - 0 1,a7a6 d1d8,600,80,95,1000,backRankMate mate mateIn1 oneMove,,"
FORK_RECORD = "00002,r1q3k1/5ppp/8/3N4/8/8/5PPP/6K1 b - - 0 1,a8b8 d5e7 g8f8 e7c8,1100,80,90,800,crushing fork middlegame short,,"
CASTLING_RECORD = "00003,r3k2r/pppq1ppp/8/8/8/8/PPPQ1PPP/R3K2R w KQkq - 0 1,e1g1 d7d2 f1d1 d2d1,1500,80,90,500,castling middlegame short,,"
EN_PASSANT_RECORD = "00004,4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1,e1e2 e8e7 e5d6 e7d6,1300,80,90,500,enPassant endgame short,,"
PROMOTION_RECORD = "00005,8/P7/8/8/8/8/6k1/4K3 b - - 0 1,g2g3 a7a8q,900,80,90,500,advancedPawn promotion endgame oneMove,,"


@pytest.fixture
def db_session_repo() -> Iterator[Session]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def db_session_shared() -> Iterator[Session]:
    """Connection to a test database. Mock real setup with multiple sessions connecting to the same engine / database tables."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def mate_in_one_record() -> str:
    """Black plays a7a6, white mates with d1d8"""
    return MATE_IN_ONE_RECORD


@pytest.fixture
def fork_record() -> str:
    """Black plays a8b8, white forks with d5e7, the king steps away g8f8, white takes the queen e7c8"""
    return FORK_RECORD


@pytest.fixture
def unplayable_records() -> list[str]:
    return [CASTLING_RECORD, EN_PASSANT_RECORD, PROMOTION_RECORD]
