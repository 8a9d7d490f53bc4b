# tests/services/api/conftest.py
from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from ffmeta.services.api.app import create_app


class FakeProcessService:
    def __init__(self):
        self.dispatched = []
        self.shut_down = False
        self.raise_on_dispatch = None

    def dispatch(self, task):
        if self.raise_on_dispatch:
            raise self.raise_on_dispatch
        self.dispatched.append(task)

    def shutdown(self, wait: bool = True):
        self.shut_down = True


@pytest.fixture()
def process_service() -> FakeProcessService:
    return FakeProcessService()


@pytest.fixture()
def api_client(process_service):
    """TestClient running the app lifespan with a fake ProcessService."""
    app = create_app(process_service=process_service)
    with TestClient(app) as client:
        yield client
    assert process_service.shut_down
