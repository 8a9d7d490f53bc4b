# ffmeta/services/cache/file_store.py
from __future__ import annotations

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from ffmeta.common.logging import get_logger
from ffmeta.domain.ports.cache import ProbeCachePort

logger = get_logger()

# leaves room for ".json" and the temp-file affixes within a 255-byte name
_MAX_STEM = 200


def file_stem(content_hash: str) -> str:
    """
    Map a content hash onto a single path component.

    Hex and other ``[A-Za-z0-9._~-]`` hashes are used as-is; anything else
    (``+``, ``/``, ``=`` from base64, ``prefix:hash`` forms) is percent-encoded.
    Names that would still be too long fall back to their SHA-256.
    """
    if not content_hash:
        raise ValueError("empty cache key")
    stem = quote(content_hash, safe="")
    if stem.strip(".") == "":
        stem = stem.replace(".", "%2E")
    if len(stem) > _MAX_STEM:
        stem = "sha256-" + hashlib.sha256(content_hash.encode("utf-8")).hexdigest()
    return stem


class FileCacheStore(ProbeCachePort):
    """
    One ``<content_hash>.json`` file per entry under ``root``.
    Writes land in a temp file first and are renamed into place, so readers
    never see partial data and concurrent writers are last-writer-wins.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def path_for(self, content_hash: str) -> Path:
        return self.root / f"{file_stem(content_hash)}.json"

    def read(self, content_hash: str) -> Optional[bytes]:
        path = self.path_for(content_hash)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def write(self, content_hash: str, payload: bytes) -> None:
        path = self.path_for(content_hash)
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".tmp", dir=self.root)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("cache write %s (%d bytes)", path, len(payload))
