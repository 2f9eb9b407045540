"""Tests for HttpxCatalogClient (TMDB API adapter)."""

from __future__ import annotations

import httpx
import pytest
import respx

from moviescout.application.query_builder import build_discover_request
from moviescout.domain.entities.catalog import Genre
from moviescout.domain.entities.errors import FetchFailed
from moviescout.infrastructure.tmdb.client import HttpxCatalogClient

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_API_KEY = "test-read-token-123"
_BASE = "https://api.themoviedb.org/3"


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@pytest.fixture()
def client(http_client: httpx.AsyncClient) -> HttpxCatalogClient:
    return HttpxCatalogClient(api_key=_API_KEY, http_client=http_client)


# ---------------------------------------------------------------------------
# TMDB JSON response fixtures
# ---------------------------------------------------------------------------

_DISCOVER_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 268,
            "title": "Batman",
            "poster_path": "/cij4dd21v2Rk2YtUQbV5kW69WB2.jpg",
            "release_date": "1989-06-21",
            "vote_average": 7.2,
            "original_language": "en",
        },
        {
            "id": 414906,
            "title": "The Batman",
            "poster_path": "/74xTEgt7R36Fpooo50r9T25onhq.jpg",
            "release_date": "2022-03-01",
            "vote_average": 7.7,
            "original_language": "en",
        },
    ],
    "total_pages": 5,
    "total_results": 97,
}

_GENRES_RESPONSE = {
    "genres": [
        {"id": 28, "name": "Action"},
        {"id": 12, "name": "Adventure"},
        {"id": 28, "name": "Action (duplicate)"},
        {"id": 16, "name": "Animation"},
    ]
}


# ---------------------------------------------------------------------------
# fetch
# ---------------------------------------------------------------------------


class TestFetch:
    @respx.mock
    async def test_returns_results_and_total_pages(self, client: HttpxCatalogClient) -> None:
        route = respx.get(f"{_BASE}/discover/movie").respond(json=_DISCOVER_RESPONSE)

        page = await client.fetch(build_discover_request("batman", 1))

        assert route.called
        assert page.total_pages == 5
        assert [m.title for m in page.results] == ["Batman", "The Batman"]
        assert page.results[0].to_dict() == _DISCOVER_RESPONSE["results"][0]

    @respx.mock
    async def test_sends_bearer_and_query(self, client: HttpxCatalogClient) -> None:
        route = respx.get(f"{_BASE}/discover/movie").respond(json=_DISCOVER_RESPONSE)

        await client.fetch(build_discover_request("batman", 2, "28"))

        request = route.calls.last.request
        assert request.headers["Authorization"] == f"Bearer {_API_KEY}"
        assert request.headers["accept"] == "application/json"
        assert request.url.params["with_keywords"] == "batman"
        assert request.url.params["page"] == "2"
        assert request.url.params["with_genres"] == "28"
        assert request.url.params["sort_by"] == "popularity.desc"

    @respx.mock
    async def test_missing_results_is_empty(self, client: HttpxCatalogClient) -> None:
        respx.get(f"{_BASE}/discover/movie").respond(json={"page": 1})

        page = await client.fetch(build_discover_request("", 1))

        assert page.results == ()
        assert page.total_pages == 1

    @respx.mock
    async def test_invalid_total_pages_defaults_to_one(
        self, client: HttpxCatalogClient
    ) -> None:
        respx.get(f"{_BASE}/discover/movie").respond(
            json={"results": [], "total_pages": "lots"}
        )

        page = await client.fetch(build_discover_request("", 1))

        assert page.total_pages == 1

    @respx.mock
    async def test_total_pages_capped_at_500(self, client: HttpxCatalogClient) -> None:
        respx.get(f"{_BASE}/discover/movie").respond(
            json={"results": [], "total_pages": 44_000}
        )

        page = await client.fetch(build_discover_request("", 1))

        assert page.total_pages == 500

    @respx.mock
    @pytest.mark.parametrize("status", [401, 404, 429, 500])
    async def test_non_success_raises(
        self, client: HttpxCatalogClient, status: int
    ) -> None:
        respx.get(f"{_BASE}/discover/movie").respond(
            status_code=status, json={"status_message": "nope"}
        )

        with pytest.raises(FetchFailed) as exc_info:
            await client.fetch(build_discover_request("batman", 1))

        assert exc_info.value.status == status
        assert exc_info.value.path == "/discover/movie"

    @respx.mock
    async def test_network_error_raises(self, client: HttpxCatalogClient) -> None:
        respx.get(f"{_BASE}/discover/movie").mock(
            side_effect=httpx.ConnectError("DNS failure")
        )

        with pytest.raises(FetchFailed) as exc_info:
            await client.fetch(build_discover_request("batman", 1))

        assert exc_info.value.status is None

    @respx.mock
    async def test_non_json_body_raises(self, client: HttpxCatalogClient) -> None:
        respx.get(f"{_BASE}/discover/movie").respond(text="<html>maintenance</html>")

        with pytest.raises(FetchFailed):
            await client.fetch(build_discover_request("", 1))

    @respx.mock
    async def test_custom_base_url(self, http_client: httpx.AsyncClient) -> None:
        client = HttpxCatalogClient(
            api_key=_API_KEY, http_client=http_client, base_url="https://tmdb.local/3/"
        )
        route = respx.get("https://tmdb.local/3/discover/movie").respond(
            json=_DISCOVER_RESPONSE
        )

        await client.fetch(build_discover_request("", 1))

        assert route.called


# ---------------------------------------------------------------------------
# list_genres
# ---------------------------------------------------------------------------


class TestListGenres:
    @respx.mock
    async def test_returns_unique_genres_in_order(self, client: HttpxCatalogClient) -> None:
        respx.get(f"{_BASE}/genre/movie/list").respond(json=_GENRES_RESPONSE)

        genres = await client.list_genres()

        assert genres == [
            Genre(id="28", name="Action"),
            Genre(id="12", name="Adventure"),
            Genre(id="16", name="Animation"),
        ]

    @respx.mock
    async def test_missing_genres_is_empty(self, client: HttpxCatalogClient) -> None:
        respx.get(f"{_BASE}/genre/movie/list").respond(json={})

        assert await client.list_genres() == []

    @respx.mock
    async def test_failure_raises(self, client: HttpxCatalogClient) -> None:
        respx.get(f"{_BASE}/genre/movie/list").respond(status_code=503)

        with pytest.raises(FetchFailed):
            await client.list_genres()
