# ffmeta/common/probe/ffprobe_helpers.py
from __future__ import annotations

import json
import shlex
import subprocess
from typing import Any, Dict, Iterable, List

from ffmeta.common.logging import get_logger

logger = get_logger()


def build_ffprobe_cmd(
    locator: str,
    *,
    ffprobe_bin: str = "ffprobe",
    log_level: str = "error",
    extra_args: Iterable[str] | None = None,
) -> List[str]:
    """
    Build an ffprobe command that emits the JSON we parse (format + streams).
    The locator is forwarded untouched; it may be a local path or a URL.
    """
    base = [
        ffprobe_bin,
        "-v", log_level,
        "-print_format", "json",
        "-show_format",
        "-show_streams",
    ]
    if extra_args:
        base.extend(extra_args)
    # Stop option parsing in case of weird filenames
    base.extend(["--", str(locator)])
    return base


def run_ffprobe(cmd: List[str], *, timeout_sec: float | None = None) -> Dict[str, Any]:
    """
    Execute ffprobe and return parsed JSON.
    Raises subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError or
    json.JSONDecodeError; the adapter maps these onto ProbeError.
    """
    logger.debug("ffprobe cmd: %s", " ".join(shlex.quote(p) for p in cmd))
    # tags are copied verbatim from the container and may not be valid UTF-8
    cp = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=True,
        timeout=timeout_sec,
    )
    data = json.loads(cp.stdout or "{}")
    if not isinstance(data, dict):
        raise json.JSONDecodeError("ffprobe output is not a JSON object", cp.stdout or "", 0)
    return data
