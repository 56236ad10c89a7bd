from __future__ import annotations

import logging
from typing import Dict, Optional

from gameguessr.db.documents import DocumentStore
from gameguessr.integrations.rawg import RawgClient
from gameguessr.models.metadata import GameMetadata

log = logging.getLogger(__name__)

METADATA_COLLECTION = "metadata"


class MetadataService:
    """Best-effort enrichment of a title with hint material.

    Lookup order: process-local cache, the ``metadata`` document collection,
    then RAWG.  Neither method raises; failures are logged and yield an
    empty result.
    """

    def __init__(self, store: DocumentStore, rawg: Optional[RawgClient] = None):
        self._store = store
        self._rawg = rawg or RawgClient()
        self._cache: Dict[str, GameMetadata] = {}

    async def fetch_metadata(self, title: str) -> GameMetadata:
        cached = self._cache.get(title)
        if cached is not None:
            return cached.model_copy()

        try:
            snapshot = await self._store.get(METADATA_COLLECTION, title)
            if snapshot is not None and snapshot.exists:
                metadata = GameMetadata.model_validate(snapshot.data)
                self._cache[title] = metadata
                return metadata.model_copy()

            if not self._rawg.configured:
                log.info("RAWG not configured; no metadata for title")
                return GameMetadata()

            metadata = await self._rawg.fetch_game_details(title)
        except Exception as exc:
            log.warning("Metadata lookup failed: %s", exc)
            return GameMetadata()

        if not metadata.is_empty():
            await self.save_metadata(title, metadata)
        return metadata.model_copy()

    async def save_metadata(self, title: str, metadata: GameMetadata) -> None:
        self._cache[title] = metadata.model_copy()
        try:
            await self._store.set(METADATA_COLLECTION, title, metadata.to_document())
        except Exception as exc:
            log.warning("Saving metadata failed: %s", exc)
