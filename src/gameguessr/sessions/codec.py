"""Compaction codec between live sessions and durable documents.

Player document::

    {"kind": "player",
     "data": {"s": secret, "h": history, "q": count, "uh": used_hint},
     "updated_at": iso, "expiresAt": iso}

AI document::

    {"kind": "ai",
     "data": {"h": history, "q": count, "mq": max_questions},
     "updated_at": iso, "expiresAt": iso}

The player's leading system-context turn is dropped on encode when it is the
canonical one and re-synthesized on decode, so documents written with or
without it both load to the same session.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from gameguessr.models.chat import ChatMessage
from gameguessr.models.session import (
    AIGuessSession,
    PlayerGuessSession,
    Session,
    system_context_message,
    system_context_text,
)

DEFAULT_TTL = timedelta(hours=24)
DEFAULT_MAX_QUESTIONS = 20

KIND_PLAYER = "player"
KIND_AI = "ai"


def _dump_history(history: List[ChatMessage]) -> List[Dict[str, Any]]:
    return [msg.model_dump() for msg in history]


def _load_history(raw: Optional[List[Dict[str, Any]]]) -> List[ChatMessage]:
    return [ChatMessage.model_validate(item) for item in raw or []]


def _is_context_message(msg: ChatMessage, secret_game: str) -> bool:
    return isinstance(msg.content, str) and msg.content.startswith(
        system_context_text(secret_game)
    )


def encode(
    session: Session,
    now: Optional[datetime] = None,
    ttl: timedelta = DEFAULT_TTL,
) -> Dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    if isinstance(session, PlayerGuessSession):
        history = session.chat_history
        if history and history[0] == system_context_message(session.secret_game):
            history = history[1:]
        kind = KIND_PLAYER
        data = {
            "s": session.secret_game,
            "h": _dump_history(history),
            "q": session.question_count,
            "uh": session.used_hint,
        }
    elif isinstance(session, AIGuessSession):
        kind = KIND_AI
        data = {
            "h": _dump_history(session.chat_history),
            "q": session.question_count,
            "mq": session.max_questions,
        }
    else:
        raise TypeError(f"Cannot encode {type(session).__name__}")

    return {
        "kind": kind,
        "data": data,
        "updated_at": now.isoformat(),
        "expiresAt": (now + ttl).isoformat(),
    }


def decode(document: Dict[str, Any]) -> Session:
    data = document.get("data") or {}
    kind = document.get("kind")
    if kind is None:
        # Untagged documents predate the discriminator; only player data has a secret.
        kind = KIND_PLAYER if "s" in data else KIND_AI

    if kind == KIND_PLAYER:
        secret_game = data["s"]
        history = _load_history(data.get("h"))
        if not history or not _is_context_message(history[0], secret_game):
            history.insert(0, system_context_message(secret_game))
        return PlayerGuessSession(
            secret_game=secret_game,
            chat_history=history,
            question_count=data.get("q", 0),
            used_hint=data.get("uh", False),
        )

    if kind == KIND_AI:
        return AIGuessSession(
            chat_history=_load_history(data.get("h")),
            question_count=data.get("q", 0),
            max_questions=data.get("mq", DEFAULT_MAX_QUESTIONS),
        )

    raise ValueError(f"Unknown session kind '{kind}'")
