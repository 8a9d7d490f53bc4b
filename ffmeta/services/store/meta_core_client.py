# ffmeta/services/store/meta_core_client.py
from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import quote

import requests

from ffmeta.common.logging import get_logger
from ffmeta.common.settings import get_settings
from ffmeta.domain.errors import PublishError
from ffmeta.domain.ports.store import MetadataStorePort

logger = get_logger()


class MetaCoreClient(MetadataStorePort):
    """HTTP client for the shared metadata store. Only merges are needed here."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_sec: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_sec = timeout_sec if timeout_sec is not None else get_settings().store.timeout_sec
        # a session passed in belongs to the caller and is left open by close()
        self._owns_session = session is None
        self.http = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self.http.close()

    def __enter__(self) -> "MetaCoreClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def merge_url(self, file_id: str) -> str:
        return f"{self.base_url}/meta/{quote(file_id, safe='')}"

    def merge_metadata(self, file_id: str, metadata: Mapping[str, str]) -> None:
        url = self.merge_url(file_id)
        try:
            resp = self.http.post(url, json={"metadata": dict(metadata)}, timeout=self.timeout_sec)
        except requests.RequestException as e:
            raise PublishError(f"metadata store unreachable: {e}") from e

        if not resp.ok:
            body = (resp.text or "").strip()[:500]
            raise PublishError(
                f"metadata store rejected merge for {file_id}: HTTP {resp.status_code} {body}".rstrip(),
                status_code=resp.status_code,
            )
        logger.debug("merged %d key(s) into %s", len(metadata), file_id)
