from __future__ import annotations

from enum import StrEnum


class ProcessStatus(StrEnum):
    completed = "completed"
    skipped = "skipped"
    failed = "failed"
