"""Live session state for both game modes.

A session is exactly one variant, fixed at creation and tagged by ``kind``.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field

from gameguessr.models.chat import ChatMessage


SYSTEM_CONTEXT_TEMPLATE = "The secret game is {secret_game}. The user will now ask questions."


def system_context_text(secret_game: str) -> str:
    """Context turn that discloses the secret to the model, never to the player."""
    return SYSTEM_CONTEXT_TEMPLATE.format(secret_game=secret_game)


def system_context_message(secret_game: str) -> ChatMessage:
    return ChatMessage(role="system", content=system_context_text(secret_game))


class PlayerGuessSession(BaseModel):
    """The player asks questions about a secret title chosen by the server."""

    kind: Literal["player"] = "player"
    secret_game: str
    chat_history: List[ChatMessage] = Field(default_factory=list)
    question_count: int = Field(default=0, ge=0)
    used_hint: bool = False

    @classmethod
    def create(cls, secret_game: str) -> PlayerGuessSession:
        return cls(
            secret_game=secret_game,
            chat_history=[system_context_message(secret_game)],
        )

    def mark_hint_used(self) -> None:
        # Sticky: once set it is never cleared for the session's lifetime.
        self.used_hint = True


class AIGuessSession(BaseModel):
    """The model asks questions to find the title the player is thinking of."""

    kind: Literal["ai"] = "ai"
    chat_history: List[ChatMessage] = Field(default_factory=list)
    question_count: int = Field(default=0, ge=0)
    max_questions: int = 20

    @property
    def questions_left(self) -> int:
        return self.max_questions - self.question_count


Session = Annotated[
    Union[PlayerGuessSession, AIGuessSession],
    Field(discriminator="kind"),
]
