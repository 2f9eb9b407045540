"""Domain entities for the movie catalog.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping
from urllib.parse import urlencode

POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"

# TMDB refuses discover requests beyond this page.
MAX_CATALOG_PAGE = 500


def poster_url(poster_path: str | None, base: str = POSTER_BASE_URL) -> str:
    if not poster_path:
        return ""
    return f"{base}{poster_path}"


@dataclass(frozen=True)
class Movie:
    """Opaque catalog record, passed through exactly as the API returned it."""

    raw: Mapping[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> str:
        value = self.raw.get("id")
        return "" if value is None else str(value)

    @property
    def title(self) -> str:
        return self.raw.get("title") or self.raw.get("original_title") or ""

    @property
    def poster_path(self) -> str | None:
        return self.raw.get("poster_path")

    @property
    def poster_url(self) -> str:
        return poster_url(self.poster_path)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw)


@dataclass(frozen=True)
class Genre:
    """Genre filter option (``id`` is kept as a string for select controls)."""

    id: str
    name: str


@dataclass(frozen=True)
class TrendingEntry:
    """Persisted search-term counter with one representative result."""

    id: str  # document id in the trend store
    term: str
    count: int = 1
    movie_id: str = ""
    title: str = ""
    poster_url: str = ""


@dataclass(frozen=True)
class CatalogRequest:
    """Fully-qualified catalog request.

    ``params`` is an ordered tuple of query pairs so two requests built from
    identical inputs compare (and hash) equal.
    """

    path: str
    params: tuple[tuple[str, str], ...] = ()

    @property
    def query(self) -> dict[str, str]:
        return dict(self.params)

    def url(self, base_url: str) -> str:
        if not self.params:
            return f"{base_url}{self.path}"
        return f"{base_url}{self.path}?{urlencode(self.params)}"


@dataclass(frozen=True)
class CatalogPage:
    """Normalized discovery response."""

    results: tuple[Movie, ...] = ()
    total_pages: int = 1


@dataclass(frozen=True)
class SearchState:
    """Snapshot of the search coordinator's state.

    Snapshots are immutable; the coordinator replaces its current snapshot
    on every transition.
    """

    raw_term: str = ""
    debounced_term: str = ""
    page: int = 1
    total_pages: int = 1
    selected_genre_id: str | None = None
    results: tuple[Movie, ...] = ()
    is_loading: bool = False
    error_message: str | None = None
    generation: int = 0

    @property
    def can_go_prev(self) -> bool:
        return self.page > 1

    @property
    def can_go_next(self) -> bool:
        return self.page < self.total_pages
