"""
Cache Manager for the Admin Service

Owns the Redis connection that is opened at startup and closed at shutdown.
Route handlers do not read or write through it yet.
"""

from typing import Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from .config import Settings
from .logging import get_logger

logger = get_logger(__name__)


class CacheConnectionError(Exception):
    """Raised when the Redis connection cannot be established."""


class CacheManager:
    """
    Redis connection lifecycle for the application
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.redis_client: Optional[Redis] = None
        self._connection_pool: Optional[redis.ConnectionPool] = None

    @property
    def is_connected(self) -> bool:
        return self.redis_client is not None

    async def connect(self) -> None:
        """Create the connection pool and verify it with a PING."""
        self._connection_pool = redis.ConnectionPool.from_url(
            self.settings.redis_url,
            password=self.settings.redis_password,
            decode_responses=True,
            max_connections=self.settings.redis_max_connections,
        )
        client = Redis(connection_pool=self._connection_pool)

        try:
            await client.ping()
        except (RedisError, OSError) as e:
            logger.error("redis_connection_failed", error=str(e))
            await client.aclose()
            await self._connection_pool.disconnect()
            self._connection_pool = None
            raise CacheConnectionError(f"Could not connect to Redis: {e}") from e

        self.redis_client = client
        logger.info("redis_connected")

    async def disconnect(self) -> None:
        """Close the Redis client and its pool."""
        if self.redis_client:
            await self.redis_client.aclose()
            self.redis_client = None
        if self._connection_pool:
            await self._connection_pool.disconnect()
            self._connection_pool = None
        logger.info("redis_disconnected")
