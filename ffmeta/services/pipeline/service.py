from __future__ import annotations

from concurrent.futures import Future
from typing import Optional

from ffmeta.common.concurrency.thread_manager import ThreadManager
from ffmeta.common.settings import get_settings
from ffmeta.domain.entities.outcome import ProcessOutcome
from ffmeta.domain.entities.task import ProcessTask
from ffmeta.domain.ports.callback import CallbackPort
from ffmeta.services.cache.factory import build_cache_store
from ffmeta.services.callbacks.http_callback import HttpCallbackSender
from ffmeta.services.pipeline.worker import MetadataWorker


class ProcessService:
    """
    Accepts tasks from the HTTP layer, runs them on a bounded thread pool and
    reports each outcome to the task's callback URL exactly once.
    """

    def __init__(
        self,
        *,
        worker: Optional[MetadataWorker] = None,
        callback: Optional[CallbackPort] = None,
        pool: Optional[ThreadManager] = None,
    ):
        cfg = get_settings()
        self.worker = worker or MetadataWorker(cache=build_cache_store(cfg))
        self.callback = callback or HttpCallbackSender()
        self.pool = pool or ThreadManager(
            name="ffmeta-process",
            max_workers=cfg.concurrency.process_workers,
            max_queue=cfg.concurrency.process_queue_maxsize,
        )

    def handle(self, task: ProcessTask) -> ProcessOutcome:
        """Run synchronously and deliver the callback."""
        outcome = self.worker.run(task)
        self.callback.send(task.callback_url, outcome.to_callback_payload(task.task_id))
        return outcome

    def dispatch(self, task: ProcessTask) -> Future[ProcessOutcome]:
        """Queue the task; raises PoolSaturated when no slot is free."""
        return self.pool.try_submit(self.handle, task)

    def shutdown(self, wait: bool = True) -> None:
        self.pool.shutdown(wait=wait)
