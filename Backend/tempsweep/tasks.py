import logging
from typing import Any, Dict

from celery import Task

from tempsweep.core.celery_app import celery_app, PURGE_TASK
from tempsweep.core.config import settings
from tempsweep.services.purge import PurgeRunFailed, create_executor

logger = logging.getLogger(__name__)

TASK_NAME = "DeleteTempFilesTask"
TASK_TITLE = "Delete Temp Files"

# Built once when the worker imports this module; the directory is not re-read per run.
executor = create_executor(settings)

class CeleryReportSink:
    """Tags the final status of a run with the Celery task id."""

    def __init__(self, task: Task):
        self.task = task

    @property
    def run_id(self) -> str:
        return self.task.request.id or "local"

    def succeeded(self, message: str) -> None:
        logger.info(f"{TASK_NAME} [{self.run_id}] succeeded: {message}")

    def failed(self, message: str) -> None:
        logger.error(f"{TASK_NAME} [{self.run_id}] failed: {message}")

@celery_app.task(bind=True, name=PURGE_TASK)
def delete_temp_files_task(self) -> Dict[str, Any]:
    """
    Scheduled maintenance: purge files older than 24 hours from the temp directory.
    """
    report = executor.run(CeleryReportSink(self))
    if not report.succeeded:
        raise PurgeRunFailed(report.message)
    return report.to_dict()
