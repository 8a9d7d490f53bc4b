# ffmeta/services/pipeline/worker.py
from __future__ import annotations

import time
from typing import Callable, Optional

from ffmeta.common.logging import get_logger
from ffmeta.common.settings import get_settings
from ffmeta.domain.entities.outcome import ProcessOutcome
from ffmeta.domain.entities.streams import NormalizedResult
from ffmeta.domain.entities.task import ProcessTask
from ffmeta.domain.errors import CacheCorruptError, ProbeError, PublishError
from ffmeta.domain.policies.classifier import classify
from ffmeta.domain.policies.projector import DURATION_KEY, project
from ffmeta.domain.ports.cache import ProbeCachePort
from ffmeta.domain.ports.probe import MediaProbePort
from ffmeta.domain.ports.store import MetadataStorePort
from ffmeta.services.cache import codec
from ffmeta.services.probe.ffprobe_adapter import FFprobeAdapter  # default adapter
from ffmeta.services.store.meta_core_client import MetaCoreClient

logger = get_logger()

NOT_A_VIDEO = "Not a video file"
ALREADY_PROCESSED = "Already processed"
FFPROBE_HINT = (
    "Make sure FFmpeg/FFprobe is installed. "
    "Set FFPROBE_BIN to the ffprobe executable if it is not on PATH; "
    "on Linux install the ffmpeg package."
)


class MetadataWorker:
    """
    Runs one file through the pipeline:
    guards -> (cache hit | probe + classify) -> project -> publish -> cache write.

    Every call ends in exactly one ProcessOutcome; nothing is raised to the
    caller. A worker holds no per-task state, so one instance may serve many
    threads at once.
    """

    def __init__(
        self,
        *,
        prober: Optional[Callable[[], MediaProbePort]] = None,
        cache: Optional[ProbeCachePort] = None,
        store_factory: Optional[Callable[[str], MetadataStorePort]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.cfg = get_settings()
        # prober is a factory returning a MediaProbePort instance (e.g., lambda: FFprobeAdapter())
        self.prober: Callable[[], MediaProbePort] = prober or (lambda: FFprobeAdapter())
        self.cache = cache
        self.store_factory: Callable[[str], MetadataStorePort] = store_factory or MetaCoreClient
        self.clock = clock

    def run(self, task: ProcessTask) -> ProcessOutcome:
        started = self.clock()

        def elapsed_ms() -> int:
            return max(0, int(round((self.clock() - started) * 1000)))

        try:
            outcome = self._run(task, elapsed_ms)
        except Exception as ex:
            logger.exception("[%s] unexpected error while processing %s", task.task_id, task.locator)
            outcome = ProcessOutcome.failed(str(ex) or type(ex).__name__, elapsed_ms())

        logger.info(
            "[%s] %s in %dms%s",
            task.task_id,
            outcome.status.value,
            outcome.duration_ms,
            f" ({outcome.reason or outcome.error})" if (outcome.reason or outcome.error) else "",
        )
        return outcome

    # ---- pipeline -------------------------------------------------------------
    def _run(self, task: ProcessTask, elapsed_ms: Callable[[], int]) -> ProcessOutcome:
        # -------------------------
        # 1) Guards
        # -------------------------
        if task.meta(self.cfg.file_type_key) != "video":
            return ProcessOutcome.skipped(NOT_A_VIDEO, elapsed_ms())
        if task.meta(DURATION_KEY) is not None:
            return ProcessOutcome.skipped(ALREADY_PROCESSED, elapsed_ms())

        content_hash = task.meta(self.cfg.content_hash_key)

        # -------------------------
        # 2) Cache hit: publish the stored result as-is
        # -------------------------
        cached = self._read_cache(content_hash) if content_hash else None
        if cached is not None:
            logger.info("[%s] using cached probe data for %s", task.task_id, task.locator)
            try:
                self._publish(task, cached)
            except PublishError as ex:
                return ProcessOutcome.failed(str(ex), elapsed_ms())
            return ProcessOutcome.completed(elapsed_ms())

        # -------------------------
        # 3) Fresh probe
        # -------------------------
        try:
            raw = self.prober().probe(task.locator)
        except ProbeError as ex:
            logger.error("[%s] probe failed for %s: %s", task.task_id, task.locator, ex)
            logger.error(FFPROBE_HINT)
            return ProcessOutcome.failed(str(ex), elapsed_ms())

        result = classify(raw)
        try:
            self._publish(task, result)
        except PublishError as ex:
            logger.error("[%s] publish failed: %s", task.task_id, ex)
            return ProcessOutcome.failed(str(ex), elapsed_ms())

        # -------------------------
        # 4) Best-effort cache write (the store already has the data)
        # -------------------------
        if content_hash:
            self._write_cache(content_hash, result)

        return ProcessOutcome.completed(elapsed_ms())

    def _publish(self, task: ProcessTask, result: NormalizedResult) -> None:
        metadata = project(result)
        store = self.store_factory(task.store_url)
        try:
            store.merge_metadata(task.file_id, metadata)
        finally:
            store.close()

    # ---- cache helpers --------------------------------------------------------
    def _read_cache(self, content_hash: str) -> Optional[NormalizedResult]:
        if self.cache is None:
            return None
        try:
            payload = self.cache.read(content_hash)
        except Exception as ex:
            logger.warning("cache read failed for %s: %s", content_hash, ex)
            return None
        if payload is None:
            return None
        try:
            return codec.decode(payload)
        except CacheCorruptError as ex:
            logger.warning("ignoring corrupt cache entry %s: %s", content_hash, ex)
            return None

    def _write_cache(self, content_hash: str, result: NormalizedResult) -> None:
        if self.cache is None:
            return
        try:
            self.cache.write(content_hash, codec.encode(result))
        except Exception as ex:
            logger.warning("cache write failed for %s: %s", content_hash, ex)
