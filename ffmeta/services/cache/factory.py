# ffmeta/services/cache/factory.py
from __future__ import annotations

from typing import Optional

from ffmeta.common.logging import get_logger
from ffmeta.common.settings import Settings, get_settings
from ffmeta.domain.ports.cache import ProbeCachePort

logger = get_logger()


def build_cache_store(cfg: Optional[Settings] = None) -> Optional[ProbeCachePort]:
    """Return the configured cache backend, or None when caching is disabled."""
    cfg = cfg or get_settings()
    if not cfg.cache.enabled:
        return None

    if cfg.cache_backend == "db":
        from ffmeta.database.core.main import Base, build_engine, build_session_factory
        from ffmeta.services.cache.sql_store import SqlCacheStore

        engine = build_engine()
        Base.metadata.create_all(bind=engine)
        logger.info("probe cache: database %s", engine.url.render_as_string(hide_password=True))
        return SqlCacheStore(build_session_factory(engine))

    from ffmeta.services.cache.file_store import FileCacheStore

    logger.info("probe cache: directory %s", cfg.cache_dir)
    return FileCacheStore(cfg.cache_dir)
