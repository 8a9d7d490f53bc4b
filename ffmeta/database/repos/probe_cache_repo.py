from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from ffmeta.database.models.probe_cache import ProbeCacheEntry


class SqlAlchemyProbeCacheRepo:
    def __init__(self, session: Session) -> None:
        self.db = session

    # --------- Reads ---------

    def get_payload(self, content_hash: str) -> Optional[bytes]:
        row = self.db.get(ProbeCacheEntry, content_hash)
        return bytes(row.payload) if row is not None else None

    # --------- Writes ---------

    def upsert(self, content_hash: str, payload: bytes) -> ProbeCacheEntry:
        existing = self.db.get(ProbeCacheEntry, content_hash)
        if existing is not None:
            existing.payload = payload
            return existing
        obj = ProbeCacheEntry(content_hash=content_hash, payload=payload)
        self.db.add(obj)
        # let caller control flush/commit when used transactionally
        return obj
