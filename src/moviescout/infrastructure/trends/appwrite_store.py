"""Appwrite document store adapter for trend tracking (REST over httpx)."""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from moviescout.domain.entities.catalog import Movie, TrendingEntry
from moviescout.domain.entities.errors import RecordFailed

log = structlog.get_logger(__name__)


def _query(method: str, attribute: str | None = None, values: list[Any] | None = None) -> str:
    """Serialize one Appwrite query (``Query.equal`` etc. in the SDKs)."""
    payload: dict[str, Any] = {"method": method}
    if attribute is not None:
        payload["attribute"] = attribute
    if values is not None:
        payload["values"] = values
    return json.dumps(payload, separators=(",", ":"))


class AppwriteTrendStore:
    """Trend documents in an Appwrite collection.

    Document attributes: ``searchTerm`` (string), ``count`` (integer),
    ``movie_id`` (string), ``title`` (string), ``poster_url`` (url).

    Implements ``TrendStorePort``. Every failure surfaces as ``RecordFailed``.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        endpoint: str,
        project_id: str,
        database_id: str,
        collection_id: str,
        api_key: str | None = None,
    ) -> None:
        self._http = http_client
        self._documents_url = (
            f"{endpoint.rstrip('/')}/databases/{database_id}"
            f"/collections/{collection_id}/documents"
        )
        self._headers = {
            "Content-Type": "application/json",
            "X-Appwrite-Project": project_id,
        }
        if api_key:
            self._headers["X-Appwrite-Key"] = api_key

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: list[tuple[str, str]] | None = None,
        body: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            resp = await self._http.request(
                method, url, params=params, json=body, headers=self._headers
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            log.warning(
                "appwrite_http_error",
                method=method,
                status=e.response.status_code,
            )
            raise RecordFailed(
                f"Appwrite {method} failed with {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            log.warning("appwrite_network_error", method=method, exc_info=True)
            raise RecordFailed(f"Appwrite {method} failed: {e}") from e
        except ValueError as e:
            raise RecordFailed("Appwrite returned invalid JSON") from e
        if not isinstance(data, dict):
            log.warning("appwrite_unexpected_payload", method=method)
            raise RecordFailed(f"Unexpected payload from Appwrite {method}")
        return data

    @staticmethod
    def _to_entry(doc: dict[str, Any]) -> TrendingEntry:
        try:
            return TrendingEntry(
                id=str(doc["$id"]),
                term=str(doc["searchTerm"]),
                count=int(doc.get("count", 1)),
                movie_id=str(doc.get("movie_id", "")),
                title=str(doc.get("title") or ""),
                poster_url=str(doc.get("poster_url") or ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise RecordFailed("Malformed Appwrite document") from e

    async def _list(self, queries: list[str]) -> list[dict[str, Any]]:
        params = [("queries[]", q) for q in queries]
        data = await self._request("GET", self._documents_url, params=params)
        documents = data.get("documents") or []
        if not isinstance(documents, list):
            raise RecordFailed("Unexpected documents field from Appwrite")
        return documents

    # ------------------------------------------------------------------
    # Public API (TrendStorePort)
    # ------------------------------------------------------------------

    async def find_by_term(self, term: str) -> TrendingEntry | None:
        docs = await self._list([_query("equal", "searchTerm", [term])])
        if not docs:
            return None
        return self._to_entry(docs[0])

    async def create(self, term: str, movie: Movie) -> TrendingEntry:
        doc = await self._request(
            "POST",
            self._documents_url,
            body={
                "documentId": "unique()",
                "data": {
                    "searchTerm": term,
                    "count": 1,
                    "movie_id": movie.id,
                    "title": movie.title,
                    "poster_url": movie.poster_url,
                },
            },
        )
        log.debug("appwrite_document_created", term=term, document_id=doc.get("$id"))
        return self._to_entry(doc)

    async def increment(self, entry: TrendingEntry) -> TrendingEntry:
        doc = await self._request(
            "PATCH",
            f"{self._documents_url}/{entry.id}",
            body={"data": {"count": entry.count + 1}},
        )
        return self._to_entry(doc)

    async def top(self, limit: int) -> list[TrendingEntry]:
        docs = await self._list(
            [_query("limit", values=[limit]), _query("orderDesc", "count")]
        )
        return [self._to_entry(d) for d in docs]
