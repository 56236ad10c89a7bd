from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from fastapi import APIRouter, Depends

from gameguessr.api.dependencies import get_game_service
from gameguessr.services.game import GameService

router = APIRouter(prefix="/ai-guesses", tags=["ai-guesses"])


class AnswerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(default="", alias="sessionId")
    user_answer: str = Field(default="", alias="userAnswer")


@router.post("/start")
async def start_game(svc: GameService = Depends(get_game_service)):
    """Start an AI-Guesses game; the response carries the first question."""
    started = await svc.start_ai_guesses_game()
    return started.to_wire()


@router.post("/answer")
async def answer(
    body: AnswerRequest,
    svc: GameService = Depends(get_game_service),
):
    """Answer the model's last question."""
    result = await svc.handle_ai_answer(body.session_id, body.user_answer)
    return result.to_wire()
