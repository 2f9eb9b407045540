"""Shared test fixtures for the moviescout test suite."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from moviescout.domain.entities.catalog import CatalogPage, Genre, Movie, TrendingEntry

# ---------------------------------------------------------------------------
# Domain entity helpers
# ---------------------------------------------------------------------------


def make_movie(movie_id: int = 155, title: str = "The Dark Knight", **extra: Any) -> Movie:
    raw: dict[str, Any] = {
        "id": movie_id,
        "title": title,
        "poster_path": f"/poster{movie_id}.jpg",
        "vote_average": 8.5,
    }
    raw.update(extra)
    return Movie(raw=raw)


def make_page(*movies: Movie, total_pages: int = 1) -> CatalogPage:
    return CatalogPage(results=tuple(movies), total_pages=total_pages)


@pytest.fixture()
def movie() -> Movie:
    return make_movie()


@pytest.fixture()
def genres() -> list[Genre]:
    return [Genre(id="28", name="Action"), Genre(id="35", name="Comedy")]


@pytest.fixture()
def trending_entry() -> TrendingEntry:
    return TrendingEntry(
        id="doc-1",
        term="batman",
        count=3,
        movie_id="155",
        title="The Dark Knight",
        poster_url="https://image.tmdb.org/t/p/w500/poster155.jpg",
    )


# ---------------------------------------------------------------------------
# Port mocks
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_cache() -> AsyncMock:
    """AsyncMock satisfying CachePort."""
    cache = AsyncMock()
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    cache.delete = AsyncMock(return_value=True)
    cache.clear = AsyncMock()
    return cache


class InMemoryCache:
    """Dict-backed CachePort for store tests.

    With ``yield_on_io`` every get/set gives up the event loop once first,
    like a real backend awaiting disk or network.
    """

    def __init__(self, *, yield_on_io: bool = False) -> None:
        self.data: dict[str, Any] = {}
        self._yield_on_io = yield_on_io

    async def get(self, key: str) -> Any | None:
        if self._yield_on_io:
            await asyncio.sleep(0)
        return self.data.get(key)

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        if self._yield_on_io:
            await asyncio.sleep(0)
        self.data[key] = value

    async def delete(self, key: str) -> bool:
        return self.data.pop(key, None) is not None

    async def clear(self) -> None:
        self.data.clear()

    async def aclose(self) -> None:
        pass


@pytest.fixture()
def memory_cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture()
def yielding_cache() -> InMemoryCache:
    return InMemoryCache(yield_on_io=True)


@pytest.fixture()
def mock_catalog() -> AsyncMock:
    """AsyncMock satisfying CatalogClientPort; empty single page by default."""
    catalog = AsyncMock()
    catalog.fetch = AsyncMock(return_value=make_page())
    catalog.list_genres = AsyncMock(return_value=[])
    return catalog


@pytest.fixture()
def mock_trend_store() -> AsyncMock:
    """AsyncMock satisfying TrendStorePort."""
    store = AsyncMock()
    store.find_by_term = AsyncMock(return_value=None)
    store.top = AsyncMock(return_value=[])
    return store
