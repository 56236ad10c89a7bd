from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fastapi import APIRouter, Depends, Query

from gameguessr.api.dependencies import get_game_service
from gameguessr.models.responses import HintType
from gameguessr.services.game import GameService

router = APIRouter(prefix="/player-guesses", tags=["player-guesses"])


class QuestionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(default="", alias="sessionId")
    user_input: str = Field(default="", alias="userInput")


@router.post("/start")
async def start_game(svc: GameService = Depends(get_game_service)):
    """Start a Player-Guesses game against today's secret title."""
    started = await svc.start_player_guesses_game()
    return started.to_wire()


@router.post("/question")
async def ask_question(
    body: QuestionRequest,
    svc: GameService = Depends(get_game_service),
):
    """Ask a yes/no question or submit a guess."""
    response = await svc.handle_player_question(body.session_id, body.user_input)
    return response.to_wire()


@router.get("/{session_id}/hint")
async def get_hint(
    session_id: str,
    hint_type: Optional[HintType] = Query(default=None, alias="hintType"),
    svc: GameService = Depends(get_game_service),
):
    """Reveal a hint; any later correct guess scores half."""
    hint = await svc.get_player_guess_hint(session_id, hint_type)
    return hint.to_wire()
