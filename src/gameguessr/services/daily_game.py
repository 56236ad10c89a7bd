"""Secret providers for the Player-Guesses mode.

``DailyGameService`` gives every player the same title on a given UTC day,
choosing it once and storing it in the ``dailyGames`` collection.
``placeholder_secret`` returns a fresh random title for tests and local runs.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Awaitable, Callable, List, Optional, Union

import httpx

from gameguessr.db.documents import DocumentStore
from gameguessr.errors import GenerationError
from gameguessr.integrations.rawg import RawgClient, RawgUnavailable
from gameguessr.llm.structured import StructuredGenerator
from gameguessr.models.responses import SecretGamePick
from gameguessr.prompts.loader import PromptLoader

log = logging.getLogger(__name__)

DAILY_GAMES_COLLECTION = "dailyGames"
RECENT_EXCLUSION_COUNT = 100
RAWG_ATTEMPTS = 5

SecretProvider = Callable[[], Awaitable[str]]


async def placeholder_secret() -> str:
    return f"Test Game {uuid.uuid4().hex[:8]}"


def date_key(when: Union[date, datetime, None] = None) -> str:
    """``YYYY-MM-DD`` for *when* in UTC (today if omitted)."""
    if when is None:
        when = datetime.now(timezone.utc)
    if isinstance(when, datetime):
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc)
        when = when.date()
    return when.isoformat()


class DailyGameService:
    def __init__(
        self,
        store: DocumentStore,
        generator: StructuredGenerator,
        rawg: Optional[RawgClient] = None,
        prompts: Optional[PromptLoader] = None,
    ):
        self._store = store
        self._generator = generator
        self._rawg = rawg or RawgClient()
        self._prompts = prompts or PromptLoader()

    async def __call__(self) -> str:
        return await self.get_daily_game()

    async def get_daily_game(self, when: Union[date, datetime, None] = None) -> str:
        """Return the secret for *when*, choosing and storing one if needed.

        RAWG is preferred; the LLM is the fallback when RAWG is unconfigured
        or keeps failing.  Titles used in the last 100 days are excluded.
        """
        key = date_key(when)
        snapshot = await self._store.get(DAILY_GAMES_COLLECTION, key)
        if snapshot is not None and snapshot.exists:
            return snapshot.data["gameName"]

        recent = await self._store.recent(DAILY_GAMES_COLLECTION, RECENT_EXCLUSION_COUNT)
        exclude = [s.data["gameName"] for s in recent if s.data.get("gameName")]

        try:
            secret_game = await self._pick_from_rawg(exclude)
        except (RawgUnavailable, httpx.HTTPError) as exc:
            log.warning("RAWG pick failed, falling back to LLM: %s", exc)
            secret_game = await self._pick_from_llm(exclude)

        await self._store.set(
            DAILY_GAMES_COLLECTION, key, {"gameName": secret_game, "date": key}
        )
        log.info("Daily game chosen for %s", key)
        return secret_game

    async def _pick_from_rawg(self, exclude: List[str]) -> str:
        for _ in range(RAWG_ATTEMPTS):
            candidate = await self._rawg.fetch_random_game()
            if candidate not in exclude:
                return candidate
        raise RawgUnavailable(
            f"No unused title from RAWG after {RAWG_ATTEMPTS} attempts."
        )

    async def _pick_from_llm(self, exclude: List[str]) -> str:
        prompt = self._prompts.render(
            "daily", "SECRET_GAME_PICK", exclude=",".join(exclude)
        )
        pick: SecretGamePick = await self._generator.generate(SecretGamePick, prompt)
        if not pick.secret_game.strip():
            raise GenerationError("Model returned an empty secretGame.")
        return pick.secret_game.strip()
