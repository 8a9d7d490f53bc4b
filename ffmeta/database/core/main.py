# ffmeta/database/core/main.py
from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from ffmeta.common.settings import get_settings

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def build_engine(url: str | None = None, **overrides: Any) -> Engine:
    """
    Create an engine from settings. Pool sizing only applies to server
    databases; SQLite picks its own pool.
    """
    cfg = get_settings()
    url = url or cfg.database_url
    kwargs: Dict[str, Any] = {"echo": cfg.db.echo, "future": True}
    if make_url(url).get_backend_name() != "sqlite":
        kwargs.update(
            pool_size=cfg.db.pool_size,
            max_overflow=cfg.db.max_overflow,
            pool_pre_ping=cfg.db.pool_pre_ping,
            pool_recycle=cfg.db.pool_recycle,
        )
    kwargs.update(overrides)
    return create_engine(url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False, future=True, autoflush=False)
