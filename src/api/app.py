"""FastAPI application factory: logging, tables, routes and error handling."""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.api.routes import router
from src.core.config import Settings, get_settings
from src.core.exceptions import GameError, RepositoryError
from src.core.logging_setup import configure_logging
from src.db.database import init_db

logger = logging.getLogger(__name__)


async def game_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Domain errors are the client's fault: unknown ids -> 404, everything else -> 400"""
    status_code = (
        status.HTTP_404_NOT_FOUND
        if isinstance(exc, RepositoryError)
        else status.HTTP_400_BAD_REQUEST
    )
    logger.info("%s %s -> %d: %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def create_app(settings: Optional[Settings] = None, create_tables: bool = True) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Chess Tutor API", version="0.1.0")
    app.include_router(router)
    app.add_exception_handler(GameError, game_error_handler)

    if create_tables:
        init_db()
    return app
