from __future__ import annotations

import logging
import uuid

from gameguessr.errors import InvalidSessionType, MissingArguments, SessionNotFound
from gameguessr.llm.structured import StructuredGenerator
from gameguessr.models.chat import ChatMessage
from gameguessr.models.responses import AIGameStarted, AIQuestion, AIResponse, AITurnResult
from gameguessr.models.session import AIGuessSession
from gameguessr.prompts.loader import PromptLoader
from gameguessr.sessions.store import SessionStore

log = logging.getLogger(__name__)

DEFAULT_MAX_QUESTIONS = 20
START_MESSAGE = "Start the game."


class AIGuessesGame:
    """The model asks questions to identify the title the player has in mind."""

    def __init__(
        self,
        store: SessionStore,
        generator: StructuredGenerator,
        prompts: PromptLoader | None = None,
        max_questions: int = DEFAULT_MAX_QUESTIONS,
    ):
        self._store = store
        self._generator = generator
        self._prompts = prompts or PromptLoader()
        self._max_questions = max_questions

    async def start(self) -> AIGameStarted:
        prompt = self._prompts.render(
            "ai_guesses", "FIRST_QUESTION", max_questions=self._max_questions
        )
        response = await self._generator.generate(AIResponse, prompt, [])

        session_id = str(uuid.uuid4())
        session = AIGuessSession(
            chat_history=[
                ChatMessage(role="user", content=START_MESSAGE),
                ChatMessage(role="model", content=response.to_wire()),
            ],
            question_count=1,
            max_questions=self._max_questions,
        )
        await self._store.save(session_id, session)
        log.info("Started ai-guesses session %s", session_id)
        return AIGameStarted(
            session_id=session_id,
            ai_response=response,
            question_count=session.question_count,
        )

    async def handle_answer(self, session_id: str, user_answer: str) -> AITurnResult:
        """Feed the player's answer back and return the model's next move.

        Only a follow-up question consumes a slot; a guess ends the game.
        """
        if not session_id or not user_answer:
            raise MissingArguments("Missing sessionId or userAnswer.")
        session = await self._store.get_or_load(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        if not isinstance(session, AIGuessSession):
            raise InvalidSessionType(session_id, "ai", session.kind)

        prompt = self._prompts.render(
            "ai_guesses",
            "NEXT_QUESTION",
            user_answer=user_answer,
            questions_left=max(session.questions_left, 0),
        )
        response = await self._generator.generate(
            AIResponse, prompt, session.chat_history
        )

        session = session.model_copy(deep=True)
        session.chat_history.append(
            ChatMessage(role="user", content=f'User answered "{user_answer}".')
        )
        session.chat_history.append(ChatMessage(role="model", content=response.to_wire()))
        if isinstance(response, AIQuestion):
            session.question_count += 1
        else:
            log.info("Session %s: model made its guess", session_id)

        await self._store.save(session_id, session)
        return AITurnResult(ai_response=response, question_count=session.question_count)
