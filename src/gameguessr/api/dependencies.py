"""Shared FastAPI dependencies: the game service singleton and provider access."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from gameguessr.config import settings
from gameguessr.db.database import async_session
from gameguessr.db.documents import DocumentStore, SQLDocumentStore
from gameguessr.integrations.rawg import RawgClient
from gameguessr.llm.base import LLMProvider
from gameguessr.llm.registry import get_provider
from gameguessr.llm.structured import StructuredGenerator
from gameguessr.prompts.loader import PromptLoader
from gameguessr.services.daily_game import DailyGameService, SecretProvider, placeholder_secret
from gameguessr.services.game import GameService
from gameguessr.services.metadata import MetadataService
from gameguessr.sessions.cache import SessionCache
from gameguessr.sessions.store import SessionStore

log = logging.getLogger(__name__)

# Provider & model can be switched at runtime via the /providers endpoint
_active_provider: str = settings.default_provider
_active_model: Optional[str] = None  # None = settings / provider default

_game_service: Optional[GameService] = None


def set_active_provider(name: str) -> None:
    global _active_provider
    _active_provider = name
    log.info("Active provider set to: %s", name)


def get_active_provider() -> str:
    return _active_provider


def set_active_model(model: Optional[str]) -> None:
    global _active_model
    _active_model = model
    log.info("Active model set to: %s", model or "(provider default)")


def get_active_model() -> Optional[str]:
    return _active_model


def _llm() -> LLMProvider:
    return get_provider(_active_provider, model=_active_model)


def build_game_service(documents: DocumentStore | None = None) -> GameService:
    """Wire a GameService from ``settings``."""
    documents = documents or SQLDocumentStore(async_session)
    prompts = PromptLoader()
    generator = StructuredGenerator(_llm)
    rawg = RawgClient()

    secret_provider: SecretProvider
    if settings.secret_source == "placeholder":
        secret_provider = placeholder_secret
    else:
        secret_provider = DailyGameService(documents, generator, rawg=rawg, prompts=prompts)

    store = SessionStore(
        documents,
        cache=SessionCache(settings.session_cache_size),
        ttl=timedelta(hours=settings.session_ttl_hours),
    )
    log.info("Game service ready (secret source: %s)", settings.secret_source)
    return GameService(
        store,
        generator,
        MetadataService(documents, rawg=rawg),
        secret_provider,
        prompts=prompts,
        max_questions=settings.max_questions,
    )


def get_game_service() -> GameService:
    # One instance per process: the session cache lives inside it.
    global _game_service
    if _game_service is None:
        _game_service = build_game_service()
    return _game_service
