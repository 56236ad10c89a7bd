from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from gameguessr.api.dependencies import get_game_service
from gameguessr.models.session import PlayerGuessSession
from gameguessr.services.game import GameService

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("/{session_id}")
async def get_session(
    session_id: str,
    svc: GameService = Depends(get_game_service),
):
    """Inspect a cached session. The secret and context turns are left out."""
    session = svc.get_session(session_id)
    if session is None:
        raise HTTPException(404, "Session not found in cache")

    view = {
        "kind": session.kind,
        "questionCount": session.question_count,
        "chatHistory": [
            m.model_dump() for m in session.chat_history if m.role != "system"
        ],
    }
    if isinstance(session, PlayerGuessSession):
        view["usedHint"] = session.used_hint
    else:
        view["maxQuestions"] = session.max_questions
    return view


@router.delete("", status_code=204)
async def clear_sessions(svc: GameService = Depends(get_game_service)):
    """Drop every session from the in-process cache."""
    svc.clear_sessions()
    return Response(status_code=204)
