"""Startup loaders for the genre filter and the trending list."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Generic, TypeVar

import structlog

from moviescout.domain.entities.catalog import Genre, TrendingEntry
from moviescout.domain.entities.errors import FetchFailed, RecordFailed
from moviescout.domain.ports.catalog import CatalogClientPort
from moviescout.domain.ports.trend_store import TrendStorePort

log = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_TRENDING_LIMIT = 5


@dataclass(frozen=True)
class LoadOutcome(Generic[T]):
    """Items from a one-shot load. ``error`` is set (and items empty) on failure."""

    items: tuple[T, ...] = ()
    error: FetchFailed | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class GenreCatalogLoader:
    """Fetches the genre list once. No retry."""

    def __init__(self, catalog: CatalogClientPort) -> None:
        self._catalog = catalog

    async def load(self) -> LoadOutcome[Genre]:
        try:
            genres = await self._catalog.list_genres()
        except FetchFailed as e:
            log.error("genre_load_failed", error=str(e), status=e.status)
            return LoadOutcome(error=e)
        log.info("genres_loaded", count=len(genres))
        return LoadOutcome(items=tuple(genres))


class TrendingLoader:
    """Fetches the top trending search terms once, for display only."""

    def __init__(self, store: TrendStorePort, limit: int = DEFAULT_TRENDING_LIMIT) -> None:
        self._store = store
        self._limit = limit

    async def load(self) -> LoadOutcome[TrendingEntry]:
        try:
            entries = await self._store.top(self._limit)
        except RecordFailed as e:
            # A store read failure is a fetch failure from the display's view.
            failure = FetchFailed(f"Trending load failed: {e}", path="trending")
            log.error("trending_load_failed", error=str(e))
            return LoadOutcome(error=failure)
        log.info("trending_loaded", count=len(entries))
        return LoadOutcome(items=tuple(entries[: self._limit]))


@dataclass
class CatalogSnapshot:
    """Genre and trending lists, written once at startup and read-only after."""

    genres: tuple[Genre, ...] = ()
    trending: tuple[TrendingEntry, ...] = ()
    genres_error: FetchFailed | None = field(default=None, repr=False)
    trending_error: FetchFailed | None = field(default=None, repr=False)

    @classmethod
    async def load(
        cls, genre_loader: GenreCatalogLoader, trending_loader: TrendingLoader
    ) -> CatalogSnapshot:
        genres, trending = await asyncio.gather(
            genre_loader.load(), trending_loader.load()
        )
        return cls(
            genres=genres.items,
            trending=trending.items,
            genres_error=genres.error,
            trending_error=trending.error,
        )
