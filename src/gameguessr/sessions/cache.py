from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional

from gameguessr.models.session import Session

log = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1000


class SessionCache:
    """Bounded in-memory map of live sessions, evicted first-in first-out.

    Overwriting an existing id keeps its original insertion position; reads
    never reorder entries.  An evicted session can always be reloaded from
    the durable store.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_SESSIONS):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._entries: Dict[str, Session] = {}

    def get(self, session_id: str) -> Optional[Session]:
        return self._entries.get(session_id)

    def put(self, session_id: str, session: Session) -> None:
        self._entries[session_id] = session
        self._enforce_bound()

    def _enforce_bound(self) -> None:
        while len(self._entries) > self.max_size:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            log.debug("Evicted session %s from cache", oldest)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
