"""
Tests for the metadata enrichment service.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from gameguessr.integrations.rawg import RawgClient
from gameguessr.models.metadata import GameMetadata
from gameguessr.services.metadata import METADATA_COLLECTION, MetadataService


def _rawg(details=None, configured=True):
    rawg = MagicMock(spec=RawgClient)
    rawg.configured = configured
    rawg.fetch_game_details = AsyncMock(return_value=details or GameMetadata())
    return rawg


class TestFetchMetadata:

    @pytest.mark.asyncio
    async def test_rawg_result_is_saved(self, documents):
        rawg = _rawg(GameMetadata(developer="Nintendo", release_year=1986))
        service = MetadataService(documents, rawg=rawg)

        metadata = await service.fetch_metadata("Zelda")

        assert metadata.developer == "Nintendo"
        snapshot = await documents.get(METADATA_COLLECTION, "Zelda")
        assert snapshot.data == {"developer": "Nintendo", "releaseYear": 1986}

    @pytest.mark.asyncio
    async def test_local_cache_hit(self, documents):
        rawg = _rawg(GameMetadata(developer="Nintendo"))
        service = MetadataService(documents, rawg=rawg)

        await service.fetch_metadata("Zelda")
        await service.fetch_metadata("Zelda")

        rawg.fetch_game_details.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stored_document_preferred_over_rawg(self, documents):
        await documents.set(METADATA_COLLECTION, "Zelda", {"publisher": "Nintendo"})
        rawg = _rawg()
        service = MetadataService(documents, rawg=rawg)

        metadata = await service.fetch_metadata("Zelda")

        assert metadata.publisher == "Nintendo"
        rawg.fetch_game_details.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_returned_copies_are_independent(self, documents):
        service = MetadataService(documents, rawg=_rawg(GameMetadata(developer="Nintendo")))

        first = await service.fetch_metadata("Zelda")
        first.special = "mutated"
        second = await service.fetch_metadata("Zelda")

        assert second.special is None

    @pytest.mark.asyncio
    async def test_unconfigured_rawg(self, documents):
        rawg = _rawg(configured=False)
        metadata = await MetadataService(documents, rawg=rawg).fetch_metadata("Zelda")

        assert metadata.is_empty()
        rawg.fetch_game_details.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rawg_failure_returns_empty(self, documents):
        rawg = _rawg()
        rawg.fetch_game_details.side_effect = httpx.ConnectError("offline")

        metadata = await MetadataService(documents, rawg=rawg).fetch_metadata("Zelda")

        assert metadata.is_empty()

    @pytest.mark.asyncio
    async def test_store_failure_returns_empty(self):
        store = AsyncMock()
        store.get.side_effect = RuntimeError("db down")

        metadata = await MetadataService(store, rawg=_rawg()).fetch_metadata("Zelda")

        assert metadata.is_empty()


class TestSaveMetadata:

    @pytest.mark.asyncio
    async def test_save_updates_cache_and_store(self, documents):
        rawg = _rawg()
        service = MetadataService(documents, rawg=rawg)

        await service.save_metadata("Zelda", GameMetadata(special="Triforce."))

        assert (await service.fetch_metadata("Zelda")).special == "Triforce."
        snapshot = await documents.get(METADATA_COLLECTION, "Zelda")
        assert snapshot.data == {"special": "Triforce."}
        rawg.fetch_game_details.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_save_failure_is_swallowed(self):
        store = AsyncMock()
        store.set.side_effect = RuntimeError("db down")

        await MetadataService(store, rawg=_rawg()).save_metadata("Zelda", GameMetadata(special="x"))
