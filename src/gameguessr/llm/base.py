from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from gameguessr.models.chat import ChatMessage


class LLMProvider(ABC):
    """Abstract base for all LLM providers (OpenAI, Anthropic, Groq)."""

    def __init__(self, model: str, temperature: float = 0.3):
        self.model = model
        self.temperature = temperature

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        history: Sequence[ChatMessage] | None = None,
        temperature: float | None = None,
        max_tokens: int = 1024,
        json_mode: bool = False,
    ) -> str:
        """Return a plain-text completion.

        *history* holds the prior turns; *user_prompt* is sent after them.
        """

    @abstractmethod
    async def complete_structured(
        self,
        system_prompt: str,
        user_prompt: str,
        response_type: Any,
        *,
        history: Sequence[ChatMessage] | None = None,
        temperature: float | None = None,
        max_tokens: int = 1024,
    ) -> Any:
        """Return a value validated against *response_type*."""


def to_chat_messages(
    system_prompt: str,
    user_prompt: str,
    history: Sequence[ChatMessage] | None,
) -> list[dict[str, str]]:
    """Build an OpenAI-style message list (also accepted by Groq)."""
    messages = [{"role": "system", "content": system_prompt}]
    for msg in history or ():
        role = "assistant" if msg.role == "model" else msg.role
        messages.append({"role": role, "content": msg.content_text()})
    messages.append({"role": "user", "content": user_prompt})
    return messages
