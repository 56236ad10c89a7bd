from __future__ import annotations

import logging
import random
import uuid
from typing import List, Tuple

from gameguessr.errors import (
    GenerationError,
    InvalidSessionType,
    MissingArguments,
    NoHintData,
    SessionNotFound,
)
from gameguessr.llm.structured import StructuredGenerator
from gameguessr.models.chat import ChatMessage
from gameguessr.models.metadata import GameMetadata
from gameguessr.models.responses import (
    AnswerToGuess,
    AnswerToQuestion,
    GuessOutcome,
    HintResponse,
    HintType,
    PlayerGameStarted,
    PlayerQAResponse,
    SpecialHint,
)
from gameguessr.models.session import PlayerGuessSession
from gameguessr.prompts.loader import PromptLoader
from gameguessr.services.clarifications import get_clarification
from gameguessr.services.daily_game import SecretProvider
from gameguessr.services.metadata import MetadataService
from gameguessr.services.scoring import calculate_score
from gameguessr.sessions.store import SessionStore

log = logging.getLogger(__name__)

DEFAULT_MAX_QUESTIONS = 20


class PlayerGuessesGame:
    """The player asks yes/no questions to find the day's secret title.

    Session state is mutated only after the model call for a turn has
    returned successfully, and on a copy that replaces the cached session only
    once it has been persisted.  A failed generation or store write leaves
    the counter and the history exactly as they were.
    """

    def __init__(
        self,
        store: SessionStore,
        generator: StructuredGenerator,
        metadata: MetadataService,
        secret_provider: SecretProvider,
        prompts: PromptLoader | None = None,
        max_questions: int = DEFAULT_MAX_QUESTIONS,
        rng: random.Random | None = None,
    ):
        self._store = store
        self._generator = generator
        self._metadata = metadata
        self._secret_provider = secret_provider
        self._prompts = prompts or PromptLoader()
        self._max_questions = max_questions
        self._rng = rng or random.Random()

    async def start(self) -> PlayerGameStarted:
        secret_game = await self._secret_provider()
        session_id = str(uuid.uuid4())
        session = PlayerGuessSession.create(secret_game)
        await self._store.save(session_id, session)
        log.info("Started player-guesses session %s", session_id)
        log.debug("Session %s secret: %s", session_id, secret_game)
        return PlayerGameStarted(session_id=session_id)

    async def handle_question(self, session_id: str, user_input: str) -> PlayerQAResponse:
        if not session_id or not user_input:
            raise MissingArguments("Missing sessionId or userInput.")
        session = await self._load(session_id)

        if session.question_count >= self._max_questions:
            log.info("Session %s is out of questions", session_id)
            return AnswerToGuess(
                question_count=session.question_count,
                content=GuessOutcome(
                    correct=False,
                    response=f"You are out of tries. The game was {session.secret_game}",
                ),
            )

        prompt = self._prompts.render(
            "player_guesses",
            "QUESTION_CLASSIFIER",
            secret_game=session.secret_game,
            user_input=user_input,
        )
        response = await self._generator.generate(
            PlayerQAResponse, prompt, session.chat_history
        )

        session = session.model_copy(deep=True)
        session.question_count += 1
        response.question_count = session.question_count

        if isinstance(response, AnswerToGuess):
            response.content.used_hint = session.used_hint
            response.content.score = calculate_score(
                response.content.correct, session.used_hint
            )
            log.info("Session %s guess judged correct=%s score=%s",
                     session_id, response.content.correct, response.content.score)
        elif response.content.clarification is None:
            response.content.clarification = get_clarification(
                session.secret_game, user_input
            )

        session.chat_history.append(
            ChatMessage(role="model", content=response.to_wire())
        )
        await self._store.save(session_id, session)
        return response

    async def get_hint(
        self, session_id: str, hint_type: HintType | None = None
    ) -> HintResponse:
        """Reveal one hint about the secret and mark the session as hinted.

        The hint flag is set and persisted even when nothing can be revealed.
        """
        if not session_id:
            raise MissingArguments("Missing sessionId.")
        session = await self._store.get_or_load(session_id)
        if not isinstance(session, PlayerGuessSession):
            raise SessionNotFound(session_id)

        metadata = await self._metadata.fetch_metadata(session.secret_game)
        if hint_type == "special" and not metadata.special:
            await self._generate_special(session.secret_game, metadata)

        session = session.model_copy(deep=True)
        session.mark_hint_used()
        await self._store.save(session_id, session)

        candidates = [
            (kind, text)
            for kind, text in _hint_candidates(metadata)
            if hint_type is None or kind == hint_type
        ]
        if not candidates:
            raise NoHintData(hint_type)

        kind, text = self._rng.choice(candidates)
        log.info("Session %s revealed a %s hint", session_id, kind)
        return HintResponse(hint_type=kind, hint_text=text)

    async def _generate_special(self, title: str, metadata: GameMetadata) -> None:
        prompt = self._prompts.render("hints", "SPECIAL_HINT", game_title=title)
        try:
            result: SpecialHint = await self._generator.generate(SpecialHint, prompt)
        except GenerationError as exc:
            log.warning("Special hint generation failed: %s", exc)
            return
        if result.special.strip():
            metadata.special = result.special.strip()
            await self._metadata.save_metadata(title, metadata)

    async def _load(self, session_id: str) -> PlayerGuessSession:
        session = await self._store.get_or_load(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if not isinstance(session, PlayerGuessSession):
            raise InvalidSessionType(session_id, "player", session.kind)
        return session


def _hint_candidates(metadata: GameMetadata) -> List[Tuple[HintType, str]]:
    candidates: List[Tuple[HintType, str]] = []
    if metadata.developer:
        candidates.append(("developer", f"The developer is {metadata.developer}."))
    if metadata.publisher:
        candidates.append(("publisher", f"The publisher is {metadata.publisher}."))
    if metadata.release_year:
        candidates.append(("releaseYear", f"It was released in {metadata.release_year}."))
    if metadata.special:
        candidates.append(("special", f"Special hint: {metadata.special}"))
    return candidates
