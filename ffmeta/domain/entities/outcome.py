# ffmeta/domain/entities/outcome.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ffmeta.domain.enums.process_status import ProcessStatus


@dataclass(frozen=True)
class ProcessOutcome:
    status: ProcessStatus
    duration_ms: int
    reason: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def completed(cls, duration_ms: int) -> "ProcessOutcome":
        return cls(ProcessStatus.completed, duration_ms)

    @classmethod
    def skipped(cls, reason: str, duration_ms: int) -> "ProcessOutcome":
        return cls(ProcessStatus.skipped, duration_ms, reason=reason)

    @classmethod
    def failed(cls, error: str, duration_ms: int) -> "ProcessOutcome":
        return cls(ProcessStatus.failed, duration_ms, error=error)

    def to_callback_payload(self, task_id: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "taskId": task_id,
            "status": self.status.value,
            "duration": self.duration_ms,
        }
        if self.reason is not None:
            payload["reason"] = self.reason
        if self.error is not None:
            payload["error"] = self.error
        return payload
