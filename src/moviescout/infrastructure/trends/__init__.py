from .appwrite_store import AppwriteTrendStore
from .cache_store import CacheTrendStore

__all__ = ["AppwriteTrendStore", "CacheTrendStore"]
