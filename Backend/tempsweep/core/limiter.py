"""
Rate Limiting Module
Uses slowapi to keep the manual trigger from being hammered.
"""
import logging
from slowapi import Limiter
from slowapi.util import get_remote_address
from tempsweep.core.config import settings

logger = logging.getLogger(__name__)

# Share counters through Redis when it is up, otherwise keep them in memory
storage_uri = "memory://"
if settings.REDIS_URL:
    try:
        import redis
        client = redis.from_url(settings.REDIS_URL, socket_connect_timeout=1)
        client.ping()
        storage_uri = settings.REDIS_URL
        logger.info(f"Rate Limiter connected to Redis at {settings.REDIS_URL}")
    except Exception as e:
        logger.warning(f"Rate Limiter: Redis not available ({e}). Falling back to memory storage.")
        storage_uri = "memory://"

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=storage_uri,
)

# Endpoint-specific limits
PURGE_LIMIT = "6/hour"
STATUS_LIMIT = "120/minute"
