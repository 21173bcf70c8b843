"""
Application settings.

Read once from environment variables prefixed with CHESS_TUTOR_ (ex. CHESS_TUTOR_DATABASE_URL).
"""

import os
from functools import lru_cache

from pydantic import BaseModel, Field

ENV_PREFIX = "CHESS_TUTOR_"


class Settings(BaseModel):
    database_url: str = "sqlite:///./chess_tutor.db"
    puzzle_csv_path: str = "data/lichess_db_puzzle_sample.csv"
    # seconds the scripted opponent waits before replying to a correct guess
    opponent_reply_delay: float = Field(default=1.0, ge=0.0)
    starting_rating: int = 1200
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Only pick up the variables that are actually set, the rest keeps its default."""
        environ = dict(os.environ) if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls(**values)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
