"""Generate database session"""

from collections.abc import Iterator
from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import get_settings
from src.db.schema import Base


@lru_cache
def get_engine() -> Engine:
    database_url = get_settings().database_url
    connect_args = (
        {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    )
    return create_engine(database_url, connect_args=connect_args)


def init_db(engine: Engine | None = None) -> None:
    """Ensure all tables are created"""
    Base.metadata.create_all(bind=engine or get_engine())


def get_db() -> Iterator[Session]:
    db = sessionmaker(bind=get_engine())()
    try:
        yield db
    finally:
        db.close()
