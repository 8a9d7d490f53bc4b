from __future__ import annotations
from typing import Optional, Protocol

class ProbeCachePort(Protocol):
    """Raw byte storage for encoded probe results, addressed by content hash."""

    def read(self, content_hash: str) -> Optional[bytes]: ...

    def write(self, content_hash: str, payload: bytes) -> None: ...
