"""Redis sorted-set implementation of the time series store.

Each stream is one sorted set: ZADD to append, ZRANGEBYSCORE / ZRANGE
WITHSCORES to read, ZREMRANGEBYSCORE to trim. Errors raised by the Redis
client are propagated to the caller unchanged.
"""

from typing import List, Optional

import redis.asyncio as redis

from order_pacing.config.settings import settings
from order_pacing.core.logger import setup_logger
from order_pacing.storage.base import Score, ScoredValue, TimeSeriesStore

logger = setup_logger(__name__)


class RedisTimeSeriesStore(TimeSeriesStore):
    """Time series store backed by Redis sorted sets."""

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        host: str = None,
        port: int = None,
        db: int = None,
        password: Optional[str] = None,
    ):
        """Initialize the Redis store.

        Args:
            client: Existing redis.asyncio client (pool settings ignored)
            host: Redis host (default from settings)
            port: Redis port (default from settings)
            db: Redis database number (default from settings)
            password: Redis password (default from settings)
        """
        self.pool = None

        if client is not None:
            self.redis = client
            logger.info("Redis store initialized with provided client")
            return

        self.host = host or settings.redis_host
        self.port = port or settings.redis_port
        self.db = db if db is not None else settings.redis_db

        # Create connection pool
        self.pool = redis.ConnectionPool(
            host=self.host,
            port=self.port,
            db=self.db,
            password=password or settings.redis_password,
            decode_responses=True,
            max_connections=settings.redis_max_connections,
            socket_timeout=settings.redis_socket_timeout,
            socket_connect_timeout=settings.redis_socket_timeout,
            retry_on_timeout=True,
        )

        self.redis = redis.Redis(connection_pool=self.pool)

        logger.info(f"Redis store initialized: {self.host}:{self.port}/{self.db}")

    async def add(self, key: str, score: int, value: str) -> None:
        await self.redis.zadd(key, {value: score})

    async def range_by_score(self, key: str, min_score: Score, max_score: Score) -> List[ScoredValue]:
        entries = await self.redis.zrangebyscore(key, min_score, max_score, withscores=True)
        return [(self._as_text(value), score) for value, score in entries]

    async def range_all(self, key: str) -> List[ScoredValue]:
        entries = await self.redis.zrange(key, 0, -1, withscores=True)
        return [(self._as_text(value), score) for value, score in entries]

    async def trim_by_score(self, key: str, min_score: Score, max_score: Score) -> None:
        removed = await self.redis.zremrangebyscore(key, min_score, max_score)
        if removed:
            logger.debug(f"Trimmed {removed} entries from {key}")

    async def health_check(self) -> bool:
        """Check Redis connectivity.

        Returns:
            True if Redis is reachable, False otherwise
        """
        try:
            await self.redis.ping()
            return True
        except redis.RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection pool."""
        await self.redis.aclose()
        if self.pool is not None:
            await self.pool.disconnect()
        logger.info("Redis store connection closed")

    @staticmethod
    def _as_text(value) -> str:
        # Clients created without decode_responses return bytes
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value
