"""Cache factory - creates the storage adapter selected by config."""

from __future__ import annotations

from typing import Literal

import structlog

from moviescout.domain.ports.cache import CachePort
from moviescout.infrastructure.cache.diskcache_adapter import DiskcacheAdapter
from moviescout.infrastructure.cache.redis_adapter import RedisAdapter

log = structlog.get_logger(__name__)

CacheBackend = Literal["diskcache", "redis"]


def create_cache(
    backend: CacheBackend = "diskcache",
    *,
    directory: str = "./.cache/moviescout",
    redis_url: str = "redis://localhost:6379/0",
    ttl_seconds: int = 0,
    max_concurrent: int = 10,
) -> CachePort:
    """Create a CachePort adapter for ``backend``.

    Raises:
        ValueError: If `backend` is unknown.
    """
    if backend == "diskcache":
        log.info(
            "cache_factory_create",
            backend=backend,
            directory=directory,
            ttl=ttl_seconds,
        )
        return DiskcacheAdapter(
            directory=directory,
            ttl_seconds=ttl_seconds,
            max_concurrent=max_concurrent,
        )
    elif backend == "redis":
        log.info("cache_factory_create", backend=backend, url=redis_url, ttl=ttl_seconds)
        return RedisAdapter(
            url=redis_url, ttl_seconds=ttl_seconds, max_concurrent=max_concurrent
        )
    else:
        raise ValueError(
            f"Unknown cache backend: {backend!r}. Must be 'diskcache' or 'redis'."
        )
