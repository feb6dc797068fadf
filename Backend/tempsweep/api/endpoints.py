"""
Purge Routes: task metadata, manual trigger and run status.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from tempsweep.core.config import settings
from tempsweep.core.limiter import limiter, PURGE_LIMIT, STATUS_LIMIT
from tempsweep.services.purge import PurgeRunFailed
from tempsweep import tasks

logger = logging.getLogger(__name__)
router = APIRouter()

# ─── Data Models ─────────────────────────────────────────────────────────────

class TaskInfo(BaseModel):
    name: str
    title: str
    root_dir: str
    schedule: Optional[str] = None

class TaskResponse(BaseModel):
    task_id: str
    message: str

class RunStatusResponse(BaseModel):
    task_id: str
    state: str
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

# ─── Routes ──────────────────────────────────────────────────────────────────

@router.get("/task", response_model=TaskInfo)
def get_task_info():
    schedule = None
    if settings.PURGE_ENABLED:
        schedule = f"daily at {settings.PURGE_SCHEDULE_HOUR:02d}:{settings.PURGE_SCHEDULE_MINUTE:02d} UTC"
    return TaskInfo(
        name=tasks.TASK_NAME,
        title=tasks.TASK_TITLE,
        root_dir=str(tasks.executor.root_dir),
        schedule=schedule,
    )

@router.post("/purge", response_model=TaskResponse, status_code=202)
@limiter.limit(PURGE_LIMIT)
def trigger_purge(request: Request):
    """
    Queue one purge run now, outside the daily schedule.
    """
    try:
        result = tasks.delete_temp_files_task.delay()
    except PurgeRunFailed as e:
        # Only reachable in eager mode, where the run happens inline.
        logger.error(f"Manual purge failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Manual purge queued as {result.id}")
    return TaskResponse(task_id=result.id, message="Purge queued")

@router.get("/purge/{task_id}", response_model=RunStatusResponse)
@limiter.limit(STATUS_LIMIT)
def get_purge_status(request: Request, task_id: str):
    result = tasks.delete_temp_files_task.AsyncResult(task_id)

    payload = None
    error = None
    try:
        state = result.state
        if state == "SUCCESS":
            payload = result.result
        elif state == "FAILURE":
            error = str(result.result)
    except Exception as e:
        logger.error(f"Result backend unavailable for {task_id}: {e}")
        raise HTTPException(status_code=503, detail="Result backend unavailable")

    return RunStatusResponse(task_id=task_id, state=state, result=payload, error=error)
