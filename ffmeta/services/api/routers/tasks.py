# ffmeta/services/api/routers/tasks.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ffmeta.common.concurrency.thread_manager import PoolSaturated
from ffmeta.common.logging import get_logger
from ffmeta.domain.entities.task import ProcessTask
from ffmeta.services.api.deps import get_process_service
from ffmeta.services.pipeline.service import ProcessService
from ffmeta.services.schemas.plugin import (
    ConfigureRequest,
    ConfigureResponse,
    ProcessRequest,
    ProcessResponse,
)

logger = get_logger()
router = APIRouter(tags=["tasks"])


@router.post("/configure", response_model=ConfigureResponse, response_model_exclude_none=True)
def configure(req: ConfigureRequest, request: Request) -> ConfigureResponse:
    request.app.state.plugin_config = dict(req.config)
    logger.info("configuration updated (%d key(s))", len(req.config))
    return ConfigureResponse(status="ok")


@router.post("/process", response_model=ProcessResponse, response_model_exclude_none=True)
def process(
    req: ProcessRequest,
    service: ProcessService = Depends(get_process_service),
) -> ProcessResponse:
    missing = req.missing_fields()
    if missing:
        logger.warning("rejecting process request, missing: %s", ", ".join(missing))
        return ProcessResponse(status="rejected", error="Missing required fields")

    task = ProcessTask(
        task_id=req.task_id,
        file_id=req.cid,
        locator=req.file_path,
        callback_url=req.callback_url,
        store_url=req.meta_core_url,
        existing_meta={str(k): v for k, v in (req.existing_meta or {}).items() if v is not None},
    )
    try:
        service.dispatch(task)
    except PoolSaturated as ex:
        return ProcessResponse(status="rejected", error=str(ex))
    return ProcessResponse(status="accepted")
