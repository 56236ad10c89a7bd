from __future__ import annotations

import logging
from typing import Any, Sequence

from openai import AsyncOpenAI

from gameguessr.llm.base import LLMProvider, to_chat_messages
from gameguessr.models.chat import ChatMessage
from gameguessr.parsing.output_parser import OutputParser, schema_name

log = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """LLM provider backed by the OpenAI API."""

    DEFAULT_MODEL = "gpt-4.1-mini"

    MODELS = [
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-5",
        "gpt-5-mini",
    ]

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        temperature: float = 0.3,
    ):
        super().__init__(model=model or self.DEFAULT_MODEL, temperature=temperature)
        self._client = AsyncOpenAI(api_key=api_key)

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
        log.info("OpenAI complete: model=%s, json_mode=%s, history=%d",
                 self.model, json_mode, len(history or ()))
        kwargs: dict = {
            "model": self.model,
            "messages": to_chat_messages(system_prompt, user_prompt, history),
            "temperature": temperature if temperature is not None else self.temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            response = await self._client.chat.completions.create(**kwargs)
            result = response.choices[0].message.content or ""
            log.info("OpenAI response: %d chars", len(result))
            return result
        except Exception as exc:
            log.error("OpenAI API error: %s", exc)
            raise

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
        log.info("OpenAI structured: model=%s, target=%s",
                 self.model, schema_name(response_type))
        augmented_system = (
            f"{system_prompt}\n\n{OutputParser.format_instructions(response_type)}"
        )
        raw = await self.complete(
            augmented_system,
            user_prompt,
            history=history,
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=True,
        )
        try:
            return OutputParser.parse(raw, response_type)
        except ValueError as exc:
            log.error("OpenAI structured parse FAILED: %s", exc)
            raise
