from __future__ import annotations
from typing import Protocol
from ffmeta.domain.entities.probe import RawProbeRecord

class MediaProbePort(Protocol):
    def probe(self, locator: str) -> RawProbeRecord: ...
