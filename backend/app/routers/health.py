"""
Liveness and readiness probes.

Readiness goes through the shared connection cache, so a probe against a
cold process also warms the cache for the requests that follow.
"""
import logging

from fastapi import APIRouter
from pymongo.errors import PyMongoError

from app.core.exceptions import ConfigurationError
from app.database.connections import get_connection_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", summary="Liveness probe")
async def health_check():
    """Returns 200 while the process is serving requests."""
    return {"status": "healthy"}


@router.get("/ready", summary="Readiness probe")
async def readiness_check():
    """
    Report whether MongoDB is usable.

    A cold cache is established here, which already pings the server; a
    cached client is pinged once. `mongodb` is one of `healthy`,
    `not_configured` (MONGO_URI missing) or `unreachable`.
    """
    cache = get_connection_cache()
    was_cached = cache.client is not None

    try:
        client = await cache.get_client()
        if was_cached:
            await client.admin.command("ping")
        mongodb = "healthy"
    except ConfigurationError:
        mongodb = "not_configured"
    except PyMongoError as e:
        logger.warning("Readiness check could not reach MongoDB: %s", e)
        mongodb = "unreachable"

    return {
        "status": "healthy" if mongodb == "healthy" else "degraded",
        "checks": {"api": "healthy", "mongodb": mongodb},
        "connection": {"cached": was_cached, "attempts": cache.attempts},
    }
