# ffmeta/services/cache/sql_store.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from ffmeta.database.repos.probe_cache_repo import SqlAlchemyProbeCacheRepo
from ffmeta.domain.ports.cache import ProbeCachePort


class SqlCacheStore(ProbeCachePort):
    """Probe cache kept in the ``probe_cache`` table; one short transaction per call."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory

    def read(self, content_hash: str) -> Optional[bytes]:
        with self.session_factory() as session:
            return SqlAlchemyProbeCacheRepo(session).get_payload(content_hash)

    def write(self, content_hash: str, payload: bytes) -> None:
        try:
            self._upsert(content_hash, payload)
        except IntegrityError:
            # another worker inserted the same hash between our get() and add()
            self._upsert(content_hash, payload)

    def _upsert(self, content_hash: str, payload: bytes) -> None:
        with self.session_factory() as session, session.begin():
            SqlAlchemyProbeCacheRepo(session).upsert(content_hash, payload)
