"""
Redis adapter - Query cache shared with the frontend.

Provides:
- Per-user cached query results keyed "{prefix}:{query_key}:{user_id}"
- Invalidation after state changes the cached views depend on

The UI caches "userRole" and "profile" per user. Publishing changes both, so
the publisher drops those keys and the next read repopulates them.
"""

import functools
from typing import Optional
from uuid import UUID

import redis.asyncio as redis
from redis.exceptions import RedisError

from hestia.config.settings import settings
from hestia.shared.core.logging import get_logger

logger = get_logger(__name__)


class QueryCache:
    """Per-user cache of query results. Subclasses pick the backend."""

    async def invalidate(self, user_id: UUID, *keys: str) -> None:
        """Drop the cached results for ``keys`` of one user."""
        raise NotImplementedError

    async def ping(self) -> bool:
        """True if the backend is reachable."""
        return True

    async def close(self) -> None:
        """Release backend connections."""


class RedisQueryCache(QueryCache):
    """
    Query cache backed by Redis.

    Failures are logged and never raised.
    """

    def __init__(self, url: Optional[str] = None, prefix: Optional[str] = None):
        """
        Initialize Redis query cache.

        Args:
            url: Redis URL (redis://host:port/db)
            prefix: Key namespace
        """
        self.url = url or settings.REDIS_URL
        self.prefix = prefix or settings.QUERY_CACHE_PREFIX
        self._client: Optional[redis.Redis] = None

    @property
    def client(self) -> redis.Redis:
        """Lazy-loaded Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                decode_responses=True,
            )
        return self._client

    def key(self, query_key: str, user_id: UUID) -> str:
        """Fully qualified cache key."""
        return f"{self.prefix}:{query_key}:{user_id}"

    async def invalidate(self, user_id: UUID, *keys: str) -> None:
        if not keys:
            return
        names = [self.key(query_key, user_id) for query_key in keys]
        try:
            deleted = await self.client.delete(*names)
        except RedisError as e:
            logger.warning("query_cache_invalidate_failed", keys=names, error=str(e))
            return
        logger.debug("query_cache_invalidated", keys=names, deleted=deleted)

    async def ping(self) -> bool:
        """Check Redis connectivity."""
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Release the connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


@functools.lru_cache(maxsize=1)
def get_query_cache() -> RedisQueryCache:
    """Get or create the Redis query cache singleton."""
    return RedisQueryCache()
