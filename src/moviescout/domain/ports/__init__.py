from .cache import CachePort
from .catalog import CatalogClientPort
from .trend_store import TrendStorePort

__all__ = [
    "CachePort",
    "CatalogClientPort",
    "TrendStorePort",
]
