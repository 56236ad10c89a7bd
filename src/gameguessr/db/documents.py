"""Durable document store: get/set JSON documents by collection and id.

Documents carrying an ``expiresAt`` ISO timestamp are treated as absent once
that moment has passed, and ``delete_expired`` purges them.
"""

from __future__ import annotations

import copy
import itertools
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, Tuple

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from gameguessr.db.tables import DBDocument

log = logging.getLogger(__name__)

EXPIRES_AT_FIELD = "expiresAt"


@dataclass(frozen=True)
class DocumentSnapshot:
    id: str
    data: Optional[Dict[str, Any]]

    @property
    def exists(self) -> bool:
        return self.data is not None


class DocumentStore(Protocol):
    async def get(self, collection: str, doc_id: str) -> Optional[DocumentSnapshot]: ...
    async def set(self, collection: str, doc_id: str, document: Dict[str, Any]) -> None: ...
    async def recent(self, collection: str, limit: int) -> List[DocumentSnapshot]: ...
    async def delete_expired(self, now: Optional[datetime] = None) -> int: ...


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_expiry(document: Dict[str, Any]) -> Optional[datetime]:
    """Read the TTL hint from *document* as an aware UTC datetime."""
    raw = document.get(EXPIRES_AT_FIELD)
    if raw is None:
        return None
    if isinstance(raw, datetime):
        value = raw
    else:
        value = datetime.fromisoformat(str(raw))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _naive_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class InMemoryDocumentStore:
    """Dict-backed store with the same TTL semantics as the SQL store."""

    def __init__(self) -> None:
        self._docs: Dict[Tuple[str, str], Tuple[Dict[str, Any], int]] = {}
        self._clock = itertools.count()

    def _live(self, key: Tuple[str, str], now: datetime) -> Optional[Dict[str, Any]]:
        entry = self._docs.get(key)
        if entry is None:
            return None
        data, _ = entry
        expires = parse_expiry(data)
        if expires is not None and expires <= now:
            return None
        return data

    async def get(self, collection: str, doc_id: str) -> Optional[DocumentSnapshot]:
        data = self._live((collection, doc_id), utcnow())
        if data is None:
            return None
        return DocumentSnapshot(id=doc_id, data=copy.deepcopy(data))

    async def set(self, collection: str, doc_id: str, document: Dict[str, Any]) -> None:
        self._docs[(collection, doc_id)] = (copy.deepcopy(document), next(self._clock))

    async def recent(self, collection: str, limit: int) -> List[DocumentSnapshot]:
        now = utcnow()
        keys = sorted(
            (key for key in self._docs if key[0] == collection),
            key=lambda key: self._docs[key][1],
            reverse=True,
        )
        snapshots = []
        for key in keys:
            data = self._live(key, now)
            if data is not None:
                snapshots.append(DocumentSnapshot(id=key[1], data=copy.deepcopy(data)))
            if len(snapshots) >= limit:
                break
        return snapshots

    async def delete_expired(self, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        expired = [key for key in self._docs if self._live(key, now) is None]
        for key in expired:
            del self._docs[key]
        return len(expired)

    def clear(self) -> None:
        self._docs.clear()


class SQLDocumentStore:
    """Documents persisted in the ``documents`` table via async SQLAlchemy."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker

    async def get(self, collection: str, doc_id: str) -> Optional[DocumentSnapshot]:
        async with self._sessionmaker() as db:
            row = await db.get(DBDocument, (collection, doc_id))
        if row is None:
            return None
        if row.expires_at is not None and row.expires_at <= _naive_utc(utcnow()):
            log.debug("Document %s/%s has expired", collection, doc_id)
            return None
        return DocumentSnapshot(id=doc_id, data=json.loads(row.data_json))

    async def set(self, collection: str, doc_id: str, document: Dict[str, Any]) -> None:
        expires = parse_expiry(document)
        async with self._sessionmaker() as db:
            row = await db.get(DBDocument, (collection, doc_id))
            if row is None:
                row = DBDocument(collection=collection, doc_id=doc_id)
                db.add(row)
            row.data_json = json.dumps(document)
            row.updated_at = _naive_utc(utcnow())
            row.expires_at = _naive_utc(expires) if expires is not None else None
            await db.commit()

    async def recent(self, collection: str, limit: int) -> List[DocumentSnapshot]:
        now = _naive_utc(utcnow())
        stmt = (
            select(DBDocument)
            .where(DBDocument.collection == collection)
            .where((DBDocument.expires_at.is_(None)) | (DBDocument.expires_at > now))
            .order_by(DBDocument.updated_at.desc())
            .limit(limit)
        )
        async with self._sessionmaker() as db:
            result = await db.execute(stmt)
            rows = result.scalars().all()
        return [DocumentSnapshot(id=r.doc_id, data=json.loads(r.data_json)) for r in rows]

    async def delete_expired(self, now: Optional[datetime] = None) -> int:
        cutoff = _naive_utc(now or utcnow())
        async with self._sessionmaker() as db:
            result = await db.execute(
                delete(DBDocument).where(DBDocument.expires_at <= cutoff)
            )
            await db.commit()
        log.info("Purged %d expired documents", result.rowcount)
        return result.rowcount
