"""Port for the trend-tracking document store."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from moviescout.domain.entities.catalog import Movie, TrendingEntry


@runtime_checkable
class TrendStorePort(Protocol):
    """Async document store holding one counter document per search term.

    Implementations raise ``RecordFailed`` on store errors.
    """

    async def find_by_term(self, term: str) -> TrendingEntry | None:
        """Exact-match lookup by search term."""
        ...

    async def create(self, term: str, movie: Movie) -> TrendingEntry:
        """Create a new entry with count=1 and a snapshot of ``movie``."""
        ...

    async def increment(self, entry: TrendingEntry) -> TrendingEntry:
        """Persist ``entry.count + 1``."""
        ...

    async def top(self, limit: int) -> list[TrendingEntry]:
        """Entries ordered by descending count, at most ``limit``."""
        ...
