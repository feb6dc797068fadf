import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from tempsweep.core.config import settings
from tempsweep.core.limiter import limiter
from tempsweep.core.logging_config import configure_logging
from tempsweep.api import endpoints

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

# Rate Limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(endpoints.router, prefix="/api", tags=["purge"])

logger.info(f"{settings.PROJECT_NAME} watching {settings.TEMP_DIR}")

@app.get("/health")
def health_check():
    return {"status": "healthy", "project": settings.PROJECT_NAME}
