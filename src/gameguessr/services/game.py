from __future__ import annotations

from typing import Optional

from gameguessr.llm.structured import StructuredGenerator
from gameguessr.models.responses import (
    AIGameStarted,
    AITurnResult,
    HintResponse,
    HintType,
    PlayerGameStarted,
    PlayerQAResponse,
)
from gameguessr.models.session import Session
from gameguessr.prompts.loader import PromptLoader
from gameguessr.services.ai_guesses import AIGuessesGame
from gameguessr.services.daily_game import SecretProvider
from gameguessr.services.metadata import MetadataService
from gameguessr.services.player_guesses import DEFAULT_MAX_QUESTIONS, PlayerGuessesGame
from gameguessr.sessions.store import SessionStore


class GameService:
    """Public surface of the game core.

    Manages:
    - Player-Guesses sessions (secret title, questions, hints, scoring)
    - AI-Guesses sessions (model asks, player answers)
    - The shared session cache and its durable backing store
    """

    def __init__(
        self,
        store: SessionStore,
        generator: StructuredGenerator,
        metadata: MetadataService,
        secret_provider: SecretProvider,
        prompts: PromptLoader | None = None,
        max_questions: int = DEFAULT_MAX_QUESTIONS,
    ):
        self._store = store
        prompts = prompts or PromptLoader()
        self.player_guesses = PlayerGuessesGame(
            store, generator, metadata, secret_provider,
            prompts=prompts, max_questions=max_questions,
        )
        self.ai_guesses = AIGuessesGame(
            store, generator, prompts=prompts, max_questions=max_questions
        )

    # ── Player-Guesses ───────────────────────────────────────────────────

    async def start_player_guesses_game(self) -> PlayerGameStarted:
        return await self.player_guesses.start()

    async def handle_player_question(
        self, session_id: str, user_input: str
    ) -> PlayerQAResponse:
        return await self.player_guesses.handle_question(session_id, user_input)

    async def get_player_guess_hint(
        self, session_id: str, hint_type: HintType | None = None
    ) -> HintResponse:
        return await self.player_guesses.get_hint(session_id, hint_type)

    # ── AI-Guesses ───────────────────────────────────────────────────────

    async def start_ai_guesses_game(self) -> AIGameStarted:
        return await self.ai_guesses.start()

    async def handle_ai_answer(self, session_id: str, user_answer: str) -> AITurnResult:
        return await self.ai_guesses.handle_answer(session_id, user_answer)

    # ── Sessions ─────────────────────────────────────────────────────────

    def get_session(self, session_id: str) -> Optional[Session]:
        """Cache-only lookup; never touches the durable store."""
        return self._store.get_cached(session_id)

    async def get_or_load_session(self, session_id: str) -> Optional[Session]:
        return await self._store.get_or_load(session_id)

    def clear_sessions(self) -> None:
        self._store.clear_cache()
