from .catalog import (
    MAX_CATALOG_PAGE,
    CatalogPage,
    CatalogRequest,
    Genre,
    Movie,
    SearchState,
    TrendingEntry,
    poster_url,
)
from .errors import FetchFailed, MovieScoutError, RecordFailed, SessionNotFound

__all__ = [
    "MAX_CATALOG_PAGE",
    "CatalogPage",
    "CatalogRequest",
    "FetchFailed",
    "Genre",
    "Movie",
    "MovieScoutError",
    "RecordFailed",
    "SearchState",
    "SessionNotFound",
    "TrendingEntry",
    "poster_url",
]
