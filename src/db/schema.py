"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.core.shared_types import Status


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    position_fen: Mapped[str]
    moves_uci: Mapped[list[str]] = mapped_column(JSON, default=list)
    status: Mapped[str] = mapped_column(default=Status.IN_PROGRESS)
    winner: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)


class DBPuzzle(Base):
    __tablename__ = "puzzles"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    record: Mapped[str]
    position_fen: Mapped[str]
    current_step: Mapped[int]
    player_rating: Mapped[int]
    used_hint: Mapped[bool] = mapped_column(default=False)
    opponent_move_pending: Mapped[bool] = mapped_column(default=False)
    rating_awarded: Mapped[Optional[int]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
