"""Trend recording use case: best-effort search-term counters."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import structlog

from moviescout.domain.entities.catalog import Movie, TrendingEntry
from moviescout.domain.entities.errors import RecordFailed
from moviescout.domain.ports.trend_store import TrendStorePort

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RecordOutcome:
    """Result of one ``record()`` call. Exactly one of entry/error is set."""

    entry: TrendingEntry | None = None
    error: RecordFailed | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class TrendRecorder:
    """Counts searches per term against the first matching result.

    Never raises: store failures come back as ``RecordOutcome.error`` so the
    caller decides whether to surface them. The find then increment/create
    sequence runs under a lock, so concurrent searches for one term each
    add exactly one to its count.
    """

    def __init__(self, store: TrendStorePort) -> None:
        self._store = store
        self._lock = asyncio.Lock()

    async def record(self, term: str, movie: Movie) -> RecordOutcome:
        try:
            async with self._lock:
                existing = await self._store.find_by_term(term)
                if existing is not None:
                    entry = await self._store.increment(existing)
                else:
                    entry = await self._store.create(term, movie)
        except RecordFailed as e:
            log.warning("trend_record_failed", term=term, error=str(e))
            return RecordOutcome(error=e)

        log.info("trend_recorded", term=term, count=entry.count, movie_id=entry.movie_id)
        return RecordOutcome(entry=entry)
