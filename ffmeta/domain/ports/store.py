from __future__ import annotations
from typing import Mapping, Protocol

class MetadataStorePort(Protocol):
    def merge_metadata(self, file_id: str, metadata: Mapping[str, str]) -> None: ...

    def close(self) -> None: ...
