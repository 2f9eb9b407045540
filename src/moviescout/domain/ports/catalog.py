"""Port for movie catalog API operations."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from moviescout.domain.entities.catalog import CatalogPage, CatalogRequest, Genre


@runtime_checkable
class CatalogClientPort(Protocol):
    """Async interface for the movie catalog.

    Both methods raise ``FetchFailed`` instead of returning partial data.
    """

    async def fetch(self, request: CatalogRequest) -> CatalogPage:
        """Issue a discovery request and normalize the response."""
        ...

    async def list_genres(self) -> list[Genre]:
        """Fetch the static genre id/name list."""
        ...
