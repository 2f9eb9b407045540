"""Diskcache adapter - SQLite-backed key-value storage, no daemon process."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, TypeVar

import structlog
from diskcache import Cache as DiskCache

log = structlog.get_logger(__name__)

T = TypeVar("T")


class DiskcacheAdapter:
    """CachePort over ``diskcache.Cache``.

    diskcache is synchronous, so every operation runs in a worker thread and
    a semaphore bounds concurrent SQLite access. Values are pickled by
    diskcache itself. ``ttl=0`` stores a value without expiry.

    Args:
        directory: Directory holding the SQLite database.
        ttl_seconds: Expiry used when ``set()`` gets no ``ttl`` (0 = none).
        max_concurrent: Max parallel disk operations.
    """

    def __init__(
        self,
        directory: str | Path = "./.cache/moviescout",
        ttl_seconds: int = 0,
        max_concurrent: int = 10,
    ) -> None:
        self.directory = Path(directory)
        self.default_ttl = ttl_seconds
        self._cache: DiskCache | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

        log.info(
            "diskcache_adapter_init",
            directory=str(self.directory),
            default_ttl=ttl_seconds,
            max_concurrent=max_concurrent,
        )

    async def __aenter__(self) -> DiskcacheAdapter:
        if self._cache is None:
            self._cache = await asyncio.to_thread(DiskCache, str(self.directory))
            log.info("diskcache_opened", directory=str(self.directory))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._cache is None:
            return
        cache, self._cache = self._cache, None
        await asyncio.to_thread(cache.close)
        log.info("diskcache_closed", directory=str(self.directory))

    async def _call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        async with self._semaphore:
            return await asyncio.to_thread(fn, *args, **kwargs)

    def _opened(self) -> DiskCache:
        if self._cache is None:
            raise RuntimeError(
                "Diskcache not opened. Use 'async with cache:' or await cache.__aenter__()"
            )
        return self._cache

    # --- CachePort implementation ---
    async def get(self, key: str) -> Any | None:
        value = await self._call(self._opened().get, key, default=None)
        log.debug("cache_get", key=key, hit=value is not None)
        return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        expire = self.default_ttl if ttl is None else ttl
        await self._call(self._opened().set, key, value, expire=expire or None)
        log.debug("cache_set", key=key, ttl=expire)

    async def delete(self, key: str) -> bool:
        if self._cache is None:
            return False
        deleted = bool(await self._call(self._cache.delete, key))
        log.debug("cache_delete", key=key, deleted=deleted)
        return deleted

    async def clear(self) -> None:
        if self._cache is None:
            return
        removed = await self._call(self._cache.clear)
        log.warning("cache_cleared", directory=str(self.directory), removed=removed)
