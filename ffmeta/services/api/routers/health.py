# ffmeta/services/api/routers/health.py
from __future__ import annotations

from fastapi import APIRouter, Request

from ffmeta.services.api.manifest import MANIFEST, VERSION
from ffmeta.services.schemas.plugin import HealthResponse, PluginManifest

router = APIRouter(tags=["plugin"])


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    return HealthResponse(ready=bool(getattr(request.app.state, "ready", False)), version=VERSION)


@router.get("/manifest", response_model=PluginManifest, response_model_exclude_none=True)
def manifest() -> PluginManifest:
    return MANIFEST
