from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ffmeta.common.logging import get_logger
from ffmeta.common.settings import get_settings
from ffmeta.services.api.manifest import VERSION
from ffmeta.services.api.routers import health, tasks
from ffmeta.services.pipeline.service import ProcessService

logger = get_logger()


def create_app(process_service: Optional[ProcessService] = None) -> FastAPI:
    cfg = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.process_service is None:
            app.state.process_service = ProcessService()
        app.state.ready = True
        logger.info("%s %s ready", cfg.app_name, VERSION)
        try:
            yield
        finally:
            app.state.ready = False
            app.state.process_service.shutdown(wait=True)

    app = FastAPI(
        title="ffmeta",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.ready = False
    app.state.plugin_config = {}
    app.state.process_service = process_service

    # Routers
    app.include_router(health.router)
    app.include_router(tasks.router)
    return app


app = create_app()
