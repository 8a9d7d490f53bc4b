from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

R = TypeVar("R")

log = logging.getLogger(__name__)


class PoolSaturated(RuntimeError):
    """Raised by try_submit() when every outstanding-task slot is taken."""


@dataclass
class ThreadStats:
    start_ts: float
    tasks_submitted: int = 0
    tasks_completed: int = 0
    tasks_failed: int = 0
    tasks_rejected: int = 0

    @property
    def uptime_sec(self) -> float:
        return time.time() - self.start_ts

    @property
    def in_flight(self) -> int:
        return max(0, self.tasks_submitted - (self.tasks_completed + self.tasks_failed))


class ThreadManager:
    """
    Bounded thread pool for I/O-bound, fire-and-forget work (ffprobe runs,
    HTTP publishes). Each submitted task is independent; the pool holds no
    state shared between tasks other than its own counters.

    - submit(fn, ...) blocks while the pool is saturated (backpressure)
    - try_submit(fn, ...) raises PoolSaturated instead of blocking, which is
      what a request handler wants
    """

    def __init__(
        self,
        name: str = "worker",
        max_workers: Optional[int] = None,
        max_queue: Optional[int] = None,
    ) -> None:
        if max_workers is None:
            n = os.cpu_count() or 4
            max_workers = max(4, min(8, n * 2))  # I/O-friendly default

        self._name = name
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=name)
        self._stats = ThreadStats(start_ts=time.time())
        # max_queue counts outstanding tasks (queued + running); None/<=0 means unbounded
        self._slots = threading.Semaphore(max_queue) if max_queue and max_queue > 0 else None
        self._closed = False
        self._lock = threading.Lock()

    # -------------------------
    # Lifecycle
    # -------------------------
    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        """Shut down the executor. Safe to call multiple times."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)

    def __enter__(self) -> "ThreadManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)

    @property
    def closed(self) -> bool:
        return self._closed

    def stats(self) -> ThreadStats:
        """Return a *snapshot* of current stats."""
        with self._lock:
            return ThreadStats(
                start_ts=self._stats.start_ts,
                tasks_submitted=self._stats.tasks_submitted,
                tasks_completed=self._stats.tasks_completed,
                tasks_failed=self._stats.tasks_failed,
                tasks_rejected=self._stats.tasks_rejected,
            )

    # -------------------------
    # Submission
    # -------------------------
    def submit(self, fn: Callable[..., R], /, *args, **kwargs) -> Future[R]:
        """Submit a callable, waiting for a free slot if the pool is bounded."""
        self._ensure_open()
        if self._slots is not None:
            self._slots.acquire()
        return self._dispatch(fn, args, kwargs)

    def try_submit(self, fn: Callable[..., R], /, *args, **kwargs) -> Future[R]:
        """Submit a callable or raise PoolSaturated right away."""
        self._ensure_open()
        if self._slots is not None and not self._slots.acquire(blocking=False):
            with self._lock:
                self._stats.tasks_rejected += 1
            raise PoolSaturated(f"{self._name}: all task slots are busy")
        return self._dispatch(fn, args, kwargs)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"{self._name}: submit() after shutdown")

    def _dispatch(self, fn: Callable[..., R], args: tuple, kwargs: dict) -> Future[R]:
        def _wrapped() -> R:
            try:
                return fn(*args, **kwargs)
            finally:
                # release slot when the callable *finishes*, success or error
                if self._slots is not None:
                    self._slots.release()

        try:
            fut: Future[R] = self._executor.submit(_wrapped)
        except BaseException:
            # _wrapped never runs, so its slot has to be handed back here
            if self._slots is not None:
                self._slots.release()
            raise

        with self._lock:
            self._stats.tasks_submitted += 1

        def _done(f: Future[R]) -> None:
            if f.cancelled():
                return
            exc = f.exception()
            with self._lock:
                if exc is None:
                    self._stats.tasks_completed += 1
                else:
                    self._stats.tasks_failed += 1
            if exc is not None:
                log.error("%s task failed: %s", self._name, exc, exc_info=exc)

        fut.add_done_callback(_done)
        return fut
