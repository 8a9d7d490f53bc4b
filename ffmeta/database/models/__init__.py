from ffmeta.database.core.main import Base
from ffmeta.database.models.probe_cache import ProbeCacheEntry

__all__ = [
    "Base",
    "ProbeCacheEntry",
]
