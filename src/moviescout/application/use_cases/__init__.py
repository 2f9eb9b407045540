from .loaders import CatalogSnapshot, GenreCatalogLoader, LoadOutcome, TrendingLoader
from .search_coordinator import GENERIC_ERROR_MESSAGE, SearchCoordinator
from .trend_recorder import RecordOutcome, TrendRecorder

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "CatalogSnapshot",
    "GenreCatalogLoader",
    "LoadOutcome",
    "RecordOutcome",
    "SearchCoordinator",
    "TrendRecorder",
    "TrendingLoader",
]
