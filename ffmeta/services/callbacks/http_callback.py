# ffmeta/services/callbacks/http_callback.py
from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

from ffmeta.common.logging import get_logger
from ffmeta.common.settings import get_settings
from ffmeta.domain.ports.callback import CallbackPort

logger = get_logger()


class HttpCallbackSender(CallbackPort):
    """Fire-and-forget POST of the task outcome; delivery problems are only logged."""

    def __init__(self, *, timeout_sec: Optional[float] = None, session: Optional[requests.Session] = None):
        self.timeout_sec = timeout_sec if timeout_sec is not None else get_settings().store.callback_timeout_sec
        self.http = session or requests.Session()

    def send(self, url: str, payload: Mapping[str, Any]) -> None:
        try:
            resp = self.http.post(url, json=dict(payload), timeout=self.timeout_sec)
        except requests.RequestException as e:
            logger.error("callback to %s failed: %s", url, e)
            return
        if not resp.ok:
            logger.error("callback to %s returned HTTP %s", url, resp.status_code)
