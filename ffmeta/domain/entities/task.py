# ffmeta/domain/entities/task.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class ProcessTask:
    """
    One unit of work handed over by the orchestrator: which file, where to read
    it from, what is already known about it, and where results go.
    """
    task_id: str
    file_id: str
    locator: str
    callback_url: str
    store_url: str
    existing_meta: Dict[str, str] = field(default_factory=dict)

    def meta(self, key: str) -> Optional[str]:
        value = self.existing_meta.get(key)
        if value is None:
            return None
        value = str(value)
        return value or None
