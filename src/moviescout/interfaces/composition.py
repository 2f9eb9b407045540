"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

import functools
from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from moviescout.application.sessions import SessionRegistry
from moviescout.application.use_cases.loaders import (
    CatalogSnapshot,
    GenreCatalogLoader,
    TrendingLoader,
)
from moviescout.application.use_cases.search_coordinator import SearchCoordinator
from moviescout.application.use_cases.trend_recorder import TrendRecorder
from moviescout.domain.ports import TrendStorePort
from moviescout.infrastructure.cache.cache_factory import create_cache
from moviescout.infrastructure.config.schema import AppConfig
from moviescout.infrastructure.tmdb.client import HttpxCatalogClient
from moviescout.infrastructure.trends import AppwriteTrendStore, CacheTrendStore
from moviescout.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


async def _build_trend_store(state: AppState, config: AppConfig) -> TrendStorePort:
    """Select the trend store backend; opens the cache when it is used."""
    state.cache = None
    trends = config.trends

    if trends.backend == "appwrite":
        log.info(
            "trend_store_appwrite",
            endpoint=trends.appwrite_endpoint,
            project_id=trends.appwrite_project_id,
            collection_id=trends.appwrite_collection_id,
        )
        return AppwriteTrendStore(
            http_client=state.http_client,
            endpoint=trends.appwrite_endpoint,
            project_id=trends.appwrite_project_id or "",
            database_id=trends.appwrite_database_id or "",
            collection_id=trends.appwrite_collection_id or "",
            api_key=trends.appwrite_api_key,
        )

    cache = create_cache(
        backend=config.cache.backend,
        directory=str(config.cache.directory),
        redis_url=config.cache.redis_url,
        max_concurrent=config.cache.max_concurrent,
    )
    await cache.__aenter__()
    state.cache = cache
    log.info("trend_store_cache", backend=config.cache.backend)
    return CacheTrendStore(cache=cache)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP client (catalog + Appwrite)
        2. Catalog client
        3. Trend store (cache or Appwrite) + recorder
        4. One-shot genre/trending load
        5. Session registry
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) HTTP client
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 2) Catalog client
    if not config.tmdb_api_key:
        log.error(
            "tmdb_api_key_missing",
            hint="set MOVIESCOUT_TMDB_API_KEY; catalog requests will fail",
        )
    state.catalog = HttpxCatalogClient(
        api_key=config.tmdb_api_key or "",
        http_client=state.http_client,
        base_url=config.tmdb_base_url,
    )

    # 3) Trend store + recorder
    state.trend_store = await _build_trend_store(state, config)
    state.trend_recorder = TrendRecorder(store=state.trend_store)

    # 4) Genre + trending lists (exactly one attempt each)
    state.catalog_snapshot = await CatalogSnapshot.load(
        GenreCatalogLoader(state.catalog),
        TrendingLoader(state.trend_store, limit=config.search_trending_limit),
    )

    # 5) Search sessions
    state.sessions = SessionRegistry(
        factory=functools.partial(
            SearchCoordinator,
            state.catalog,
            state.trend_recorder,
            debounce_seconds=config.debounce_seconds,
        ),
        max_sessions=config.search_max_sessions,
    )

    log.info(
        "app_startup_complete",
        genres=len(state.catalog_snapshot.genres),
        trending=len(state.catalog_snapshot.trending),
    )

    try:
        yield
    finally:
        await state.sessions.close_all()
        log.info("search_sessions_closed")

        await state.http_client.aclose()
        log.info("http_client_closed")

        if state.cache is not None:
            await state.cache.aclose()
            log.info("cache_closed")

        log.info("app_shutdown_complete")
