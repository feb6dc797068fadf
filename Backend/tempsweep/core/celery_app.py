import logging
from celery import Celery
from celery.schedules import crontab
from celery.signals import after_setup_logger
from tempsweep.core.config import settings
from tempsweep.core.logging_config import configure_logging

logger = logging.getLogger(__name__)

PURGE_TASK = "tempsweep.tasks.delete_temp_files"

def build_beat_schedule(conf=settings) -> dict:
    if not conf.PURGE_ENABLED:
        return {}
    return {
        "delete-temp-files": {
            "task": PURGE_TASK,
            "schedule": crontab(minute=conf.PURGE_SCHEDULE_MINUTE, hour=conf.PURGE_SCHEDULE_HOUR),
        }
    }

def get_celery_app() -> Celery:
    redis_url = settings.REDIS_URL

    app = Celery(
        "tempsweep_tasks",
        broker=redis_url,
        backend=redis_url,
        include=["tempsweep.tasks"]
    )

    app.conf.update(
        result_expires=86400, # 24 hours
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        timezone="UTC",
        enable_utc=True,
        # Don't ack until the run completes so a lost worker re-queues it.
        task_acks_late=True,
        task_reject_on_worker_lost=True,
        broker_transport_options={'visibility_timeout': 600},
        beat_schedule=build_beat_schedule(),
    )

    # Without Redis, run tasks in-process (task_always_eager) so the API
    # still works during development.
    try:
        import redis
        client = redis.from_url(redis_url, socket_connect_timeout=1)
        client.ping()
        logger.info(f"[Celery] Connected to Redis at {redis_url}")
    except Exception as e:
        logger.warning(f"[Celery] Redis not available ({e}). Running in SYNC mode (task_always_eager=True).")
        # Keep inline results in process memory so /api/purge/{id} can still answer.
        app.conf.update(
            task_always_eager=True,
            task_eager_propagates=True,
            task_store_eager_result=True,
            result_backend="cache+memory://",
        )

    return app

@after_setup_logger.connect
def _setup_worker_logger(logger, *args, **kwargs):  # pylint: disable=unused-argument
    # Replace Celery's default handlers with ours
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    configure_logging(settings.LOG_LEVEL, logger)

celery_app = get_celery_app()
