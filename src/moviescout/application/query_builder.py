"""Catalog request construction (pure functions, no I/O)."""

from __future__ import annotations

from moviescout.domain.entities.catalog import MAX_CATALOG_PAGE, CatalogRequest

DISCOVER_PATH = "/discover/movie"
GENRE_LIST_PATH = "/genre/movie/list"
SORT_BY_POPULARITY = "popularity.desc"


def clamp_page(page: int, total_pages: int = MAX_CATALOG_PAGE) -> int:
    """Clamp ``page`` into ``1..min(total_pages, MAX_CATALOG_PAGE)``."""
    upper = max(1, min(total_pages, MAX_CATALOG_PAGE))
    return max(1, min(page, upper))


def build_discover_request(
    term: str, page: int = 1, genre_id: str | None = None
) -> CatalogRequest:
    """Build a popularity-sorted discovery request.

    A non-empty ``term`` adds the keyword filter and a non-empty ``genre_id``
    adds the genre filter. Values are URL-encoded when the request is
    rendered, not here.
    """
    params: list[tuple[str, str]] = [("sort_by", SORT_BY_POPULARITY)]
    if term:
        params.append(("with_keywords", term))
    params.append(("page", str(clamp_page(page))))
    if genre_id:
        params.append(("with_genres", str(genre_id)))
    return CatalogRequest(path=DISCOVER_PATH, params=tuple(params))


def build_genre_list_request() -> CatalogRequest:
    return CatalogRequest(path=GENRE_LIST_PATH)
