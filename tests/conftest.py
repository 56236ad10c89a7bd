"""
Pytest fixtures for GameGuessr tests.
"""

from unittest.mock import AsyncMock

import pytest

from gameguessr.db.documents import InMemoryDocumentStore
from gameguessr.llm.structured import StructuredGenerator
from gameguessr.models.metadata import GameMetadata
from gameguessr.prompts.loader import PromptLoader
from gameguessr.services.ai_guesses import AIGuessesGame
from gameguessr.services.game import GameService
from gameguessr.services.metadata import MetadataService
from gameguessr.services.player_guesses import PlayerGuessesGame
from gameguessr.sessions.store import SessionStore


@pytest.fixture
def documents() -> InMemoryDocumentStore:
    """Fresh in-memory durable store."""
    return InMemoryDocumentStore()


@pytest.fixture
def session_store(documents) -> SessionStore:
    """Session store with its own isolated cache."""
    return SessionStore(documents)


@pytest.fixture
def generator() -> AsyncMock:
    """Structured generation client whose replies each test scripts."""
    return AsyncMock(spec=StructuredGenerator)


@pytest.fixture
def metadata() -> AsyncMock:
    """Metadata service that knows nothing unless a test says otherwise."""
    service = AsyncMock(spec=MetadataService)
    service.fetch_metadata.return_value = GameMetadata()
    return service


@pytest.fixture
def secret_provider() -> AsyncMock:
    return AsyncMock(return_value="Zelda")


@pytest.fixture
def prompts() -> PromptLoader:
    return PromptLoader()


@pytest.fixture
def player_game(session_store, generator, metadata, secret_provider, prompts) -> PlayerGuessesGame:
    return PlayerGuessesGame(session_store, generator, metadata, secret_provider, prompts=prompts)


@pytest.fixture
def ai_game(session_store, generator, prompts) -> AIGuessesGame:
    return AIGuessesGame(session_store, generator, prompts=prompts)


@pytest.fixture
def game_service(session_store, generator, metadata, secret_provider, prompts) -> GameService:
    return GameService(session_store, generator, metadata, secret_provider, prompts=prompts)
