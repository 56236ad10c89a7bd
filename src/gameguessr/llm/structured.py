"""The structured generation client used by both game modes."""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence, Union

from gameguessr.errors import GenerationError
from gameguessr.llm.base import LLMProvider
from gameguessr.models.chat import ChatMessage
from gameguessr.parsing.output_parser import schema_name

log = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are Bot Boy, the host of a video game guessing game. "
    "Always answer with a single JSON value and nothing else."
)

ProviderSource = Union[LLMProvider, Callable[[], LLMProvider]]


class StructuredGenerator:
    """Submit a prompt plus prior turns and return a schema-validated value.

    ``llm`` is either a provider or a zero-argument factory resolved on every
    call, so the active provider can change at runtime.  Every provider or
    parse failure surfaces as ``GenerationError``.
    """

    def __init__(self, llm: ProviderSource, system_prompt: str = DEFAULT_SYSTEM_PROMPT):
        self._llm = llm
        self._system_prompt = system_prompt

    def _provider(self) -> LLMProvider:
        if isinstance(self._llm, LLMProvider):
            return self._llm
        return self._llm()

    async def generate(
        self,
        schema: Any,
        prompt: str,
        history: Sequence[ChatMessage] = (),
    ) -> Any:
        try:
            return await self._provider().complete_structured(
                system_prompt=self._system_prompt,
                user_prompt=prompt,
                response_type=schema,
                history=list(history),
            )
        except GenerationError:
            raise
        except Exception as exc:
            log.error("Structured generation failed for %s: %s", schema_name(schema), exc)
            raise GenerationError(str(exc)) from exc
