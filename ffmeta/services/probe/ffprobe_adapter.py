# ffmeta/services/probe/ffprobe_adapter.py
from __future__ import annotations

import json
import shutil
import subprocess
from typing import Optional

from ffmeta.common.logging import get_logger
from ffmeta.common.probe.ffprobe_helpers import build_ffprobe_cmd, run_ffprobe
from ffmeta.common.settings import get_settings
from ffmeta.domain.entities.probe import RawProbeRecord
from ffmeta.domain.errors import ProbeError
from ffmeta.domain.ports.probe import MediaProbePort

logger = get_logger()


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort using `ffprobe`.
    One attempt per call; safe to use from worker threads (I/O-bound).
    """

    def __init__(
        self,
        ffprobe_bin: Optional[str] = None,
        timeout_sec: Optional[int] = None,
        log_level: Optional[str] = None,
    ):
        cfg = get_settings()
        candidate = ffprobe_bin or cfg.ffprobe_bin
        # resolve bare names on PATH for nicer errors; absolute paths are used as-is
        resolved = shutil.which(candidate)
        if not resolved:
            raise ProbeError(f"ffprobe not found: {candidate!r}; set FFPROBE_BIN or install ffmpeg.")

        self.ffprobe_bin = resolved
        self.timeout_sec = int(timeout_sec or cfg.ffprobe.timeout_sec)
        self.log_level = log_level or cfg.ffprobe.log_level

    # ---- Port API -------------------------------------------------------------
    def probe(self, locator: str) -> RawProbeRecord:
        if not locator:
            raise ProbeError("No locator provided to probe().")

        cmd = build_ffprobe_cmd(locator, ffprobe_bin=self.ffprobe_bin, log_level=self.log_level)
        try:
            data = run_ffprobe(cmd, timeout_sec=self.timeout_sec)
        except subprocess.TimeoutExpired as e:
            raise ProbeError(f"ffprobe timed out after {self.timeout_sec}s") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            message = stderr.splitlines()[-1] if stderr else f"ffprobe exited with code {e.returncode}"
            raise ProbeError(message, stderr=e.stderr, returncode=e.returncode) from e
        except OSError as e:
            raise ProbeError(f"Failed to execute ffprobe: {e}") from e
        except json.JSONDecodeError as e:
            raise ProbeError("ffprobe produced invalid JSON") from e
        except UnicodeDecodeError as e:
            raise ProbeError(f"ffprobe output is not valid UTF-8: {e}") from e

        record = RawProbeRecord.from_ffprobe_json(data)
        logger.debug("ffprobe %s: %d stream(s)", locator, len(record.streams))
        return record
