from __future__ import annotations

import logging
from typing import Any, Sequence

from anthropic import AsyncAnthropic

from gameguessr.llm.base import LLMProvider
from gameguessr.models.chat import ChatMessage
from gameguessr.parsing.output_parser import OutputParser, schema_name

log = logging.getLogger(__name__)

_TOOL_NAME = "structured_output"
_WRAPPER_KEY = "result"


def _split_history(
    system_prompt: str,
    user_prompt: str,
    history: Sequence[ChatMessage] | None,
) -> tuple[str, list[dict[str, str]]]:
    """Anthropic takes system text separately; system turns are folded into it.

    Consecutive same-role turns are merged since the Messages API expects
    alternating roles.
    """
    system_parts = [system_prompt]
    messages: list[dict[str, str]] = []
    for msg in history or ():
        if msg.role == "system":
            system_parts.append(msg.content_text())
            continue
        role = "assistant" if msg.role == "model" else "user"
        if messages and messages[-1]["role"] == role:
            messages[-1]["content"] += "\n\n" + msg.content_text()
        else:
            messages.append({"role": role, "content": msg.content_text()})
    if messages and messages[-1]["role"] == "user":
        messages[-1]["content"] += "\n\n" + user_prompt
    else:
        messages.append({"role": "user", "content": user_prompt})
    return "\n\n".join(system_parts), messages


class AnthropicProvider(LLMProvider):
    """LLM provider backed by the Anthropic API."""

    DEFAULT_MODEL = "claude-haiku-4-5-20251001"

    MODELS = [
        "claude-sonnet-4-5-20250929",
        "claude-haiku-4-5-20251001",
    ]

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        temperature: float = 0.3,
    ):
        super().__init__(model=model or self.DEFAULT_MODEL, temperature=temperature)
        self._client = AsyncAnthropic(api_key=api_key)

    def _temperature(self, temperature: float | None) -> float:
        temp = temperature if temperature is not None else self.temperature
        return min(temp, 1.0)

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
        system, messages = _split_history(system_prompt, user_prompt, history)
        log.info("Anthropic complete: model=%s, turns=%d", self.model, len(messages))
        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=self._temperature(temperature),
                system=system,
                messages=messages,
            )
            result = response.content[0].text
            log.info("Anthropic response: %d chars", len(result))
            return result
        except Exception as exc:
            log.error("Anthropic API error: %s", exc)
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
        """Use Anthropic tool-use to extract structured output."""
        log.info("Anthropic structured: model=%s, target=%s",
                 self.model, schema_name(response_type))
        schema = OutputParser.json_schema(response_type)
        # Tool input must be an object; unions are wrapped in a single property.
        wrapped = schema.get("type") != "object"
        if wrapped:
            defs = schema.pop("$defs", None)
            schema = {
                "type": "object",
                "properties": {_WRAPPER_KEY: schema},
                "required": [_WRAPPER_KEY],
            }
            if defs:
                schema["$defs"] = defs

        system, messages = _split_history(system_prompt, user_prompt, history)
        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=self._temperature(temperature),
                system=system,
                messages=messages,
                tools=[
                    {
                        "name": _TOOL_NAME,
                        "description": f"Return the result as a {schema_name(response_type)} object.",
                        "input_schema": schema,
                    }
                ],
                tool_choice={"type": "tool", "name": _TOOL_NAME},
            )
        except Exception as exc:
            log.error("Anthropic API error: %s", exc)
            raise

        for block in response.content:
            if block.type == "tool_use" and block.name == _TOOL_NAME:
                log.info("Anthropic structured via tool_use OK")
                payload = block.input
                if wrapped:
                    payload = payload.get(_WRAPPER_KEY, payload)
                return OutputParser.validate(payload, response_type)

        log.warning("Anthropic: no tool_use block found, falling back to text parse")
        text_parts = [b.text for b in response.content if hasattr(b, "text")]
        return OutputParser.parse("\n".join(text_parts), response_type)
