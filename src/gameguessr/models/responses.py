"""Structured shapes exchanged with the model and returned to clients.

Field aliases carry the camelCase wire names; models are dumped with
``by_alias=True`` and ``exclude_none=True``.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# ─── Player-Guesses ──────────────────────────────────────────────────────


class YesNoClarification(_WireModel):
    answer: Literal["Yes", "No", "I don't know"]
    clarification: Optional[str] = None
    confidence: Optional[float] = None


class AnswerToQuestion(_WireModel):
    type: Literal["answer"] = "answer"
    question_count: int = Field(default=0, alias="questionCount")
    content: YesNoClarification


class GuessOutcome(_WireModel):
    correct: bool
    response: str
    score: Optional[float] = Field(
        default=None,
        description="Fractional score awarded for this guess (1, 0.5 or 0).",
    )
    used_hint: Optional[bool] = Field(
        default=None,
        alias="usedHint",
        description="Whether the player had used a hint at the time of this guess.",
    )
    confidence: Optional[float] = None


class AnswerToGuess(_WireModel):
    type: Literal["guessResult"] = "guessResult"
    question_count: int = Field(default=0, alias="questionCount")
    content: GuessOutcome


PlayerQAResponse = Annotated[
    Union[AnswerToQuestion, AnswerToGuess],
    Field(discriminator="type"),
]


# ─── AI-Guesses ──────────────────────────────────────────────────────────


class AIQuestion(_WireModel):
    type: Literal["question"] = "question"
    content: str
    confidence: Optional[float] = None


class AIGuess(_WireModel):
    type: Literal["guess"] = "guess"
    content: Union[bool, str]
    confidence: Optional[float] = Field(
        default=None,
        description="1-10, how confident the model is that it will win.",
    )


AIResponse = Annotated[
    Union[AIQuestion, AIGuess],
    Field(discriminator="type"),
]


# ─── Hints & secrets ─────────────────────────────────────────────────────


HintType = Literal["developer", "publisher", "releaseYear", "special"]


class SpecialHint(_WireModel):
    special: str


class SecretGamePick(_WireModel):
    secret_game: str = Field(alias="secretGame")


class HintResponse(_WireModel):
    hint_type: HintType = Field(alias="hintType")
    hint_text: str = Field(alias="hintText")


# ─── Operation results ───────────────────────────────────────────────────


class PlayerGameStarted(_WireModel):
    session_id: str = Field(alias="sessionId")


class AIGameStarted(_WireModel):
    session_id: str = Field(alias="sessionId")
    ai_response: AIResponse = Field(alias="aiResponse")
    question_count: int = Field(alias="questionCount")


class AITurnResult(_WireModel):
    ai_response: AIResponse = Field(alias="aiResponse")
    question_count: int = Field(alias="questionCount")
