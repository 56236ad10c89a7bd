"""GameGuessr: video game guessing game API.

Run with:  uvicorn gameguessr.main:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

# Configure logging for all gameguessr modules
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gameguessr.api.ai_guesses import router as ai_guesses_router
from gameguessr.api.dependencies import get_game_service
from gameguessr.api.player_guesses import router as player_guesses_router
from gameguessr.api.providers import router as providers_router
from gameguessr.api.sessions import router as sessions_router
from gameguessr.db.database import async_session, init_db
from gameguessr.db.documents import SQLDocumentStore
from gameguessr.errors import (
    GameError,
    GenerationError,
    InvalidSessionType,
    MissingArguments,
    NoHintData,
    SessionNotFound,
)
from gameguessr.services.game import GameService

log = logging.getLogger(__name__)

_STATUS_CODES = {
    MissingArguments: 400,
    InvalidSessionType: 400,
    SessionNotFound: 404,
    NoHintData: 404,
    GenerationError: 502,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    await init_db()
    await SQLDocumentStore(async_session).delete_expired()
    yield


async def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
    status = _STATUS_CODES.get(type(exc), 500)
    if status >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": str(exc)})


def create_app(service: Optional[GameService] = None) -> FastAPI:
    """Build the API.  Passing *service* skips the database lifecycle."""
    app = FastAPI(
        title="GameGuessr",
        description=(
            "Twenty-questions style video game guessing: guess the daily "
            "secret title, or let the model guess yours."
        ),
        version="0.1.0",
        lifespan=None if service is not None else lifespan,
    )
    if service is not None:
        app.dependency_overrides[get_game_service] = lambda: service

    app.add_exception_handler(GameError, game_error_handler)

    # ── API routers ──────────────────────────────────────────────────────
    app.include_router(player_guesses_router)
    app.include_router(ai_guesses_router)
    app.include_router(sessions_router)
    app.include_router(providers_router)

    @app.get("/")
    async def info():
        return {
            "name": "gameguessr",
            "version": app.version,
            "modes": ["player-guesses", "ai-guesses"],
        }

    return app


app = create_app()
