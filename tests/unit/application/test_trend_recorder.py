"""Tests for the TrendRecorder use case."""

from __future__ import annotations

from unittest.mock import AsyncMock

from moviescout.application.use_cases.trend_recorder import TrendRecorder
from moviescout.domain.entities.catalog import Movie, TrendingEntry
from moviescout.domain.entities.errors import RecordFailed


class TestRecord:
    async def test_creates_entry_for_new_term(
        self, mock_trend_store: AsyncMock, movie: Movie
    ) -> None:
        created = TrendingEntry(id="doc-1", term="batman", count=1, movie_id="155")
        mock_trend_store.create.return_value = created

        outcome = await TrendRecorder(mock_trend_store).record("batman", movie)

        assert outcome.ok
        assert outcome.entry == created
        mock_trend_store.find_by_term.assert_awaited_once_with("batman")
        mock_trend_store.create.assert_awaited_once_with("batman", movie)
        mock_trend_store.increment.assert_not_awaited()

    async def test_increments_existing_entry(
        self,
        mock_trend_store: AsyncMock,
        movie: Movie,
        trending_entry: TrendingEntry,
    ) -> None:
        mock_trend_store.find_by_term.return_value = trending_entry
        bumped = TrendingEntry(id=trending_entry.id, term="batman", count=4)
        mock_trend_store.increment.return_value = bumped

        outcome = await TrendRecorder(mock_trend_store).record("batman", movie)

        assert outcome.entry is not None
        assert outcome.entry.count == 4
        mock_trend_store.increment.assert_awaited_once_with(trending_entry)
        mock_trend_store.create.assert_not_awaited()

    async def test_lookup_failure_returned_not_raised(
        self, mock_trend_store: AsyncMock, movie: Movie
    ) -> None:
        mock_trend_store.find_by_term.side_effect = RecordFailed("unreachable")

        outcome = await TrendRecorder(mock_trend_store).record("batman", movie)

        assert not outcome.ok
        assert isinstance(outcome.error, RecordFailed)
        assert outcome.entry is None
        mock_trend_store.create.assert_not_awaited()

    async def test_write_failure_returned_not_raised(
        self, mock_trend_store: AsyncMock, movie: Movie
    ) -> None:
        mock_trend_store.create.side_effect = RecordFailed("rejected")

        outcome = await TrendRecorder(mock_trend_store).record("batman", movie)

        assert not outcome.ok
