from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from gameguessr.db.documents import DocumentStore
from gameguessr.models.session import Session
from gameguessr.sessions import codec
from gameguessr.sessions.cache import SessionCache

log = logging.getLogger(__name__)

SESSIONS_COLLECTION = "gameSessions"


class SessionStore:
    """Cache-first session lookup backed by the durable document store.

    The document store is the source of truth: every mutation is written
    through as a full compacted snapshot, and a cache miss rehydrates from it.
    Store errors propagate to the caller.
    """

    def __init__(
        self,
        documents: DocumentStore,
        cache: SessionCache | None = None,
        ttl: timedelta = codec.DEFAULT_TTL,
    ):
        self._documents = documents
        self.cache = cache if cache is not None else SessionCache()
        self._ttl = ttl

    def get_cached(self, session_id: str) -> Optional[Session]:
        return self.cache.get(session_id)

    async def get_or_load(self, session_id: str) -> Optional[Session]:
        session = self.cache.get(session_id)
        if session is not None:
            return session

        log.info("Session %s not cached, loading from store", session_id)
        snapshot = await self._documents.get(SESSIONS_COLLECTION, session_id)
        if snapshot is None or not snapshot.exists:
            return None

        session = codec.decode(snapshot.data)
        self.cache.put(session_id, session)
        return session

    async def persist(self, session_id: str, session: Session) -> None:
        document = codec.encode(session, ttl=self._ttl)
        await self._documents.set(SESSIONS_COLLECTION, session_id, document)
        log.info("Persisted %s session %s (q=%d)",
                 session.kind, session_id, session.question_count)

    async def save(self, session_id: str, session: Session) -> None:
        """Persist *session*, then make it the cached copy.

        If the write fails the cache keeps whatever it held before.
        """
        await self.persist(session_id, session)
        self.cache.put(session_id, session)

    def clear_cache(self) -> None:
        self.cache.clear()
