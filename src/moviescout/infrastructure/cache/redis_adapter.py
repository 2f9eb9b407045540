"""Redis adapter - async Redis via redis.asyncio."""

from __future__ import annotations

import asyncio
import pickle
from typing import Any

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

log = structlog.get_logger(__name__)


class RedisAdapter:
    """Async Redis storage with an op-limiting semaphore.

    Serialization via pickle (consistent with the diskcache adapter).
    Unlike a pure cache, errors are raised to the caller: the trend store
    turns them into ``RecordFailed``.

    Args:
        url: Redis URL (e.g. `redis://localhost:6379/0`).
        ttl_seconds: Default TTL (0 = no expiry).
        max_concurrent: Max parallel Redis ops.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        ttl_seconds: int = 0,
        max_concurrent: int = 50,
    ) -> None:
        self.url = url
        self.default_ttl = ttl_seconds
        self._client: Redis | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

        log.info(
            "redis_adapter_init",
            url=url,
            default_ttl=ttl_seconds,
            max_concurrent=max_concurrent,
        )

    async def __aenter__(self) -> RedisAdapter:
        if self._client is None:
            self._client = Redis.from_url(self.url, decode_responses=False)
            try:
                await self._client.ping()
                log.info("redis_connected", url=self.url)
            except RedisError as e:
                log.error("redis_connection_failed", url=self.url, error=str(e))
                raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.info("redis_closed")

    def _require_client(self) -> Redis:
        if self._client is None:
            raise RuntimeError("Redis not initialized. Use 'async with cache:'")
        return self._client

    # --- CachePort implementation ---
    async def get(self, key: str) -> Any | None:
        client = self._require_client()
        async with self._semaphore:
            raw = await client.get(key)
        if raw is None:
            log.debug("cache_miss", key=key)
            return None
        log.debug("cache_hit", key=key)
        return pickle.loads(raw)

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        client = self._require_client()
        expire_time = ttl if ttl is not None else self.default_ttl
        packed = pickle.dumps(value)

        async with self._semaphore:
            if expire_time:
                await client.setex(key, expire_time, packed)
            else:
                await client.set(key, packed)
        log.debug("cache_set", key=key, ttl=expire_time, size_bytes=len(packed))

    async def delete(self, key: str) -> bool:
        if self._client is None:
            return False

        async with self._semaphore:
            try:
                deleted = await self._client.delete(key)
            except RedisError as e:
                log.error("redis_delete_error", key=key, error=str(e))
                return False
        log.debug("cache_delete", key=key, deleted=deleted > 0)
        return deleted > 0

    async def clear(self) -> None:
        if self._client is None:
            return

        async with self._semaphore:
            await self._client.flushdb()
        log.warning("redis_flushed")
