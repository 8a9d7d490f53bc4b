# ffmeta/services/api/deps.py
from __future__ import annotations

from fastapi import Request

from ffmeta.services.pipeline.service import ProcessService


def get_process_service(request: Request) -> ProcessService:
    """
    The ProcessService created by the app lifespan.
    Tests swap it through app.dependency_overrides or create_app(process_service=...).
    """
    return request.app.state.process_service
