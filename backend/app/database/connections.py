"""
Database connection management for MongoDB.

The process holds a single Motor client. The first caller starts a connection
attempt (client construction plus a ping); callers arriving while that attempt
is in flight await the same attempt instead of opening their own. A failed
attempt is forgotten so the next call starts a fresh one.
"""
import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure

from app.config import get_settings
from app.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class MongoConnectionCache:
    """Process-scoped holder for the MongoDB client and its in-flight attempt."""

    def __init__(self):
        self._client: Optional[AsyncIOMotorClient] = None
        self._pending: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        # Bumped by close(); attempts started before it must not cache their client
        self._generation = 0
        self._attempts = 0

    @property
    def client(self) -> Optional[AsyncIOMotorClient]:
        return self._client

    @property
    def attempts(self) -> int:
        """Connection attempts started by this process. Reported by /health/ready."""
        return self._attempts

    async def get_client(self) -> AsyncIOMotorClient:
        """Return the cached client, establishing it if needed."""
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is not None:
                return self._client
            if self._pending is None:
                self._pending = asyncio.ensure_future(self._connect(self._generation))
            pending = self._pending

        # shield: a cancelled request must not cancel an attempt other callers share
        return await asyncio.shield(pending)

    def _forget_attempt(self, generation: int) -> None:
        if generation == self._generation:
            self._pending = None

    async def _connect(self, generation: int) -> AsyncIOMotorClient:
        settings = get_settings()
        if not settings.mongo_uri:
            self._forget_attempt(generation)
            raise ConfigurationError("MONGO_URI environment variable is not set")

        self._attempts += 1
        client = AsyncIOMotorClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
            tz_aware=True,
        )
        try:
            await client.admin.command("ping")
        except Exception:
            client.close()
            self._forget_attempt(generation)
            logger.warning("MongoDB connection attempt %d failed", self._attempts)
            raise

        if generation != self._generation:
            client.close()
            raise ConnectionFailure("MongoDB connection cache was closed during the attempt")

        self._client = client
        self._pending = None
        logger.info("MongoDB connection established")
        return client

    async def close(self) -> None:
        """Close the cached client and abandon any attempt still in flight."""
        async with self._lock:
            self._generation += 1
            self._pending = None
            if self._client is not None:
                self._client.close()
                self._client = None


_connection_cache = MongoConnectionCache()


def get_connection_cache() -> MongoConnectionCache:
    """Get the process-wide connection cache."""
    return _connection_cache


async def get_mongo_client() -> AsyncIOMotorClient:
    """Get or create MongoDB client."""
    return await get_connection_cache().get_client()


async def close_connections():
    """Close all database connections."""
    await get_connection_cache().close()


async def get_database(db_name: Optional[str] = None) -> AsyncIOMotorDatabase:
    """Get a MongoDB database by name, defaulting to MONGO_DB_NAME."""
    client = await get_mongo_client()
    return client[db_name or get_settings().mongo_db_name]
