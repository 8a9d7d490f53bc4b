from ffmeta.common.concurrency.thread_manager import PoolSaturated
from ffmeta.services.api.app import create_app
from starlette.testclient import TestClient


def _process_body(**overrides):
    body = {
        "taskId": "task-1",
        "cid": "cid-1",
        "filePath": "/files/movie.mkv",
        "callbackUrl": "http://orch/callback",
        "metaCoreUrl": "http://meta-core:9000",
        "existingMeta": {"fileType": "video", "cid_midhash256": "abc", "sizeBytes": 42, "gone": None},
    }
    body.update(overrides)
    return body


def test_health_ready_inside_lifespan(api_client):
    resp = api_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "ready": True, "version": "1.0.0"}


def test_health_not_ready_before_startup(process_service):
    client = TestClient(create_app(process_service=process_service))
    assert client.get("/health").json()["ready"] is False


def test_manifest(api_client):
    data = api_client.get("/manifest").json()
    assert data["id"] == "ffmpeg"
    assert data["dependencies"] == ["file-info"]
    assert data["priority"] == 15
    assert data["timeout"] == 60000
    assert data["defaultQueue"] == "fast"
    assert set(data["schema"]) == {"fileinfo/duration", "fileinfo/formatName", "stream/*"}
    assert data["config"] == {}


def test_configure_stores_config(api_client):
    resp = api_client.post("/configure", json={"config": {"probeTimeout": 30}})
    assert resp.json() == {"status": "ok"}
    assert api_client.app.state.plugin_config == {"probeTimeout": 30}


def test_process_accepts_and_dispatches(api_client, process_service):
    resp = api_client.post("/process", json=_process_body())

    assert resp.status_code == 200
    assert resp.json() == {"status": "accepted"}
    (task,) = process_service.dispatched
    assert task.task_id == "task-1"
    assert task.file_id == "cid-1"
    assert task.locator == "/files/movie.mkv"
    assert task.store_url == "http://meta-core:9000"
    assert task.meta("cid_midhash256") == "abc"
    assert task.meta("sizeBytes") == "42"
    assert "gone" not in task.existing_meta


def test_process_rejects_missing_fields(api_client, process_service):
    body = _process_body()
    del body["metaCoreUrl"]
    resp = api_client.post("/process", json=body)

    assert resp.json() == {"status": "rejected", "error": "Missing required fields"}
    assert process_service.dispatched == []


def test_process_rejects_empty_fields(api_client, process_service):
    resp = api_client.post("/process", json=_process_body(filePath=""))
    assert resp.json()["status"] == "rejected"
    assert process_service.dispatched == []


def test_process_without_existing_meta(api_client, process_service):
    body = _process_body()
    del body["existingMeta"]
    assert api_client.post("/process", json=body).json() == {"status": "accepted"}
    assert process_service.dispatched[0].existing_meta == {}


def test_process_rejects_when_pool_is_full(api_client, process_service):
    process_service.raise_on_dispatch = PoolSaturated("ffmeta-process: all task slots are busy")
    resp = api_client.post("/process", json=_process_body())
    assert resp.json() == {"status": "rejected", "error": "ffmeta-process: all task slots are busy"}
