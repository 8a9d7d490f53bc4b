from __future__ import annotations
from typing import Any, Mapping, Protocol

class CallbackPort(Protocol):
    def send(self, url: str, payload: Mapping[str, Any]) -> None: ...
