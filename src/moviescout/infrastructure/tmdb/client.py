"""TMDB API client: async httpx implementation of CatalogClientPort."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from moviescout.application.query_builder import build_genre_list_request
from moviescout.domain.entities.catalog import (
    MAX_CATALOG_PAGE,
    CatalogPage,
    CatalogRequest,
    Genre,
    Movie,
)
from moviescout.domain.entities.errors import FetchFailed

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"


class HttpxCatalogClient:
    """Async TMDB client using httpx.

    Implements ``CatalogClientPort`` from domain.ports.catalog. Authenticates
    with a bearer read-access token. No caching and no retries: every call
    is exactly one request.
    """

    def __init__(
        self,
        *,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._base_url = base_url.rstrip("/")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

    async def _get(self, request: CatalogRequest) -> dict[str, Any]:
        """GET request; raises FetchFailed on any non-success outcome."""
        url = f"{self._base_url}{request.path}"
        try:
            resp = await self._http.get(
                url, params=list(request.params), headers=self._headers()
            )
        except httpx.HTTPError as e:
            log.warning("catalog_network_error", path=request.path, exc_info=True)
            raise FetchFailed(
                f"Network error fetching {request.path}", path=request.path
            ) from e

        if resp.status_code == 401:
            log.error("catalog_api_key_invalid", status=401)
        if not resp.is_success:
            log.warning(
                "catalog_http_error", path=request.path, status=resp.status_code
            )
            raise FetchFailed(
                f"Failed to fetch {request.path}",
                path=request.path,
                status=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            log.warning("catalog_invalid_json", path=request.path)
            raise FetchFailed(
                f"Invalid JSON from {request.path}",
                path=request.path,
                status=resp.status_code,
            ) from e
        if not isinstance(data, dict):
            raise FetchFailed(
                f"Unexpected payload from {request.path}",
                path=request.path,
                status=resp.status_code,
            )
        return data

    @staticmethod
    def _total_pages(data: dict[str, Any]) -> int:
        raw = data.get("total_pages")
        try:
            total = int(raw) if raw else 1
        except (TypeError, ValueError):
            total = 1
        return max(1, min(total, MAX_CATALOG_PAGE))

    # ------------------------------------------------------------------
    # Public API (CatalogClientPort)
    # ------------------------------------------------------------------

    async def fetch(self, request: CatalogRequest) -> CatalogPage:
        """Run a discovery request. Missing ``results`` yields an empty page."""
        data = await self._get(request)
        results = data.get("results") or []
        movies = tuple(Movie(raw=m) for m in results if isinstance(m, dict))
        page = CatalogPage(results=movies, total_pages=self._total_pages(data))
        log.debug(
            "catalog_fetched",
            path=request.path,
            results=len(page.results),
            total_pages=page.total_pages,
        )
        return page

    async def list_genres(self) -> list[Genre]:
        """Fetch genre id/name pairs in catalog order, unique by id."""
        data = await self._get(build_genre_list_request())
        seen: set[str] = set()
        genres: list[Genre] = []
        for item in data.get("genres") or []:
            if not isinstance(item, dict) or item.get("id") is None:
                continue
            genre_id = str(item["id"])
            if genre_id in seen:
                continue
            seen.add(genre_id)
            genres.append(Genre(id=genre_id, name=str(item.get("name", ""))))
        log.debug("genres_fetched", count=len(genres))
        return genres
