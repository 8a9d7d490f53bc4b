# ffmeta/services/api/server.py
from __future__ import annotations

import uvicorn

from ffmeta.common.settings import get_settings


def main() -> None:
    """Console entry point: serve the plugin API on HOST:PORT."""
    cfg = get_settings()
    uvicorn.run(
        "ffmeta.services.api.app:app",
        host=cfg.listen_host,
        port=cfg.listen_port,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
