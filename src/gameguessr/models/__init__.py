from gameguessr.models.chat import ChatMessage, ChatRole
from gameguessr.models.metadata import GameMetadata
from gameguessr.models.responses import (
    AIGameStarted,
    AIGuess,
    AIQuestion,
    AIResponse,
    AITurnResult,
    AnswerToGuess,
    AnswerToQuestion,
    GuessOutcome,
    HintResponse,
    HintType,
    PlayerGameStarted,
    PlayerQAResponse,
    SecretGamePick,
    SpecialHint,
    YesNoClarification,
)
from gameguessr.models.session import (
    SYSTEM_CONTEXT_TEMPLATE,
    AIGuessSession,
    PlayerGuessSession,
    Session,
    system_context_message,
    system_context_text,
)

__all__ = [
    "ChatMessage",
    "ChatRole",
    "GameMetadata",
    "AIGameStarted",
    "AIGuess",
    "AIQuestion",
    "AIResponse",
    "AITurnResult",
    "AnswerToGuess",
    "AnswerToQuestion",
    "GuessOutcome",
    "HintResponse",
    "HintType",
    "PlayerGameStarted",
    "PlayerQAResponse",
    "SecretGamePick",
    "SpecialHint",
    "YesNoClarification",
    "SYSTEM_CONTEXT_TEMPLATE",
    "AIGuessSession",
    "PlayerGuessSession",
    "Session",
    "system_context_message",
    "system_context_text",
]
