"""Trend store persistence backed by CachePort (diskcache/redis)."""

from __future__ import annotations

import asyncio
import json
import uuid
from typing import Awaitable, TypeVar

import structlog

from moviescout.domain.entities.catalog import Movie, TrendingEntry
from moviescout.domain.entities.errors import RecordFailed
from moviescout.domain.ports.cache import CachePort

log = structlog.get_logger(__name__)

T = TypeVar("T")

# Cache key for the index (list of all stored terms).
_INDEX_KEY: str = "trend:_index"


def _entry_key(term: str) -> str:
    return f"trend:term:{term}"


def _serialize_entry(entry: TrendingEntry) -> str:
    return json.dumps(
        {
            "id": entry.id,
            "term": entry.term,
            "count": entry.count,
            "movie_id": entry.movie_id,
            "title": entry.title,
            "poster_url": entry.poster_url,
        }
    )


def _deserialize_entry(data: str) -> TrendingEntry:
    d = json.loads(data)
    return TrendingEntry(
        id=d["id"],
        term=d["term"],
        count=int(d["count"]),
        movie_id=d.get("movie_id", ""),
        title=d.get("title", ""),
        poster_url=d.get("poster_url", ""),
    )


class CacheTrendStore:
    """Stores trend documents via CachePort.

    Key schema:
    - ``trend:term:{term}`` → JSON TrendingEntry
    - ``trend:_index`` → JSON list of terms

    Entries never expire. Index updates are serialized per store instance.
    Implements ``TrendStorePort``.
    """

    def __init__(self, cache: CachePort) -> None:
        self.cache = cache
        self._index_lock = asyncio.Lock()

    async def find_by_term(self, term: str) -> TrendingEntry | None:
        data = await self._guard(self.cache.get(_entry_key(term)), "find")
        if data is None:
            return None
        try:
            return _deserialize_entry(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            log.error("trend_deserialize_error", term=term, error=str(e))
            raise RecordFailed(f"Corrupt trend entry for {term!r}") from e

    async def create(self, term: str, movie: Movie) -> TrendingEntry:
        entry = TrendingEntry(
            id=uuid.uuid4().hex,
            term=term,
            count=1,
            movie_id=movie.id,
            title=movie.title,
            poster_url=movie.poster_url,
        )
        await self._save(entry)

        async with self._index_lock:
            index = await self._load_index()
            if term not in index:
                index.append(term)
                await self._guard(
                    self.cache.set(_INDEX_KEY, json.dumps(index), ttl=0), "index"
                )

        log.debug("trend_entry_created", term=term, movie_id=entry.movie_id)
        return entry

    async def increment(self, entry: TrendingEntry) -> TrendingEntry:
        updated = TrendingEntry(
            id=entry.id,
            term=entry.term,
            count=entry.count + 1,
            movie_id=entry.movie_id,
            title=entry.title,
            poster_url=entry.poster_url,
        )
        await self._save(updated)
        log.debug("trend_entry_incremented", term=entry.term, count=updated.count)
        return updated

    async def top(self, limit: int) -> list[TrendingEntry]:
        entries: list[TrendingEntry] = []
        for term in await self._load_index():
            entry = await self.find_by_term(term)
            if entry is not None:
                entries.append(entry)
        entries.sort(key=lambda e: e.count, reverse=True)
        return entries[: max(0, limit)]

    # -- internal helpers --------------------------------------------------

    async def _save(self, entry: TrendingEntry) -> None:
        await self._guard(
            self.cache.set(_entry_key(entry.term), _serialize_entry(entry), ttl=0),
            "save",
        )

    async def _load_index(self) -> list[str]:
        data = await self._guard(self.cache.get(_INDEX_KEY), "index")
        if data is None:
            return []
        try:
            return list(json.loads(data))
        except (json.JSONDecodeError, TypeError):
            return []

    @staticmethod
    async def _guard(op: Awaitable[T], action: str) -> T:
        try:
            return await op
        except RecordFailed:
            raise
        except Exception as e:
            raise RecordFailed(f"Trend store {action} failed: {e}") from e
