"""
Redis Session Cache

Snapshots live under auth:token:<user_id>:<cache_key> so that all sessions
of one user can be found with a single pattern.
"""

import asyncio
import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from iam.app.services.session_cache import (
    ISessionCache,
    SessionCacheError,
    SessionCacheMissError,
)

logger = logging.getLogger(__name__)

KEY_PREFIX = "auth:token"
SCAN_BATCH_SIZE = 100


def session_key(user_id: str, cache_key: str) -> str:
    return f"{KEY_PREFIX}:{user_id}:{cache_key}"


class RedisSessionCache(ISessionCache):
    """ISessionCache on top of a redis.asyncio client (decode_responses=True)"""

    def __init__(self, client: aioredis.Redis):
        self.client = client

    async def verify_connection(self, timeout: float = 5.0) -> None:
        """Ping with a bounded wait; raises SessionCacheError when unreachable."""
        try:
            await asyncio.wait_for(self.client.ping(), timeout=timeout)
        except (RedisError, OSError, asyncio.TimeoutError) as exc:
            raise SessionCacheError("redis is unreachable") from exc

    async def store(self, user_id: str, cache_key: str, payload: str, ttl_seconds: int) -> None:
        try:
            await self.client.set(session_key(user_id, cache_key), payload, ex=max(1, ttl_seconds))
        except RedisError as exc:
            raise SessionCacheError(f"failed to store session for user {user_id}") from exc

    async def fetch(self, user_id: str, cache_key: str) -> str:
        key = session_key(user_id, cache_key)
        try:
            payload = await self.client.get(key)
        except RedisError as exc:
            raise SessionCacheError(f"failed to read session for user {user_id}") from exc

        if payload is None:
            raise SessionCacheMissError(key)
        return payload

    async def delete(self, user_id: str, cache_key: str) -> None:
        try:
            await self.client.delete(session_key(user_id, cache_key))
        except RedisError as exc:
            raise SessionCacheError(f"failed to delete session for user {user_id}") from exc

    async def invalidate_all(self, user_id: str) -> int:
        """Delete every snapshot of a user in one transactional pipeline"""
        pattern = session_key(user_id, "*")
        try:
            keys = [key async for key in self.client.scan_iter(match=pattern, count=SCAN_BATCH_SIZE)]
            if not keys:
                return 0

            async with self.client.pipeline(transaction=True) as pipe:
                for key in keys:
                    pipe.delete(key)
                results = await pipe.execute()
        except RedisError as exc:
            raise SessionCacheError(f"failed to invalidate sessions for user {user_id}") from exc

        removed = sum(int(r) for r in results)
        logger.debug("Invalidated %d sessions for user %s", removed, user_id)
        return removed
