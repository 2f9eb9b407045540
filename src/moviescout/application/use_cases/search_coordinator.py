"""Search coordinator: owns search/pagination/filter state and refetch rules."""

from __future__ import annotations

import asyncio
import dataclasses

import structlog

from moviescout.application.debounce import DEFAULT_DEBOUNCE_SECONDS, Debouncer
from moviescout.application.query_builder import build_discover_request, clamp_page
from moviescout.application.use_cases.trend_recorder import TrendRecorder
from moviescout.domain.entities.catalog import CatalogRequest, SearchState
from moviescout.domain.entities.errors import FetchFailed
from moviescout.domain.ports.catalog import CatalogClientPort

log = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Error fetching movies. Please try again later."


class SearchCoordinator:
    """Reactive search state machine: Idle → Loading → {Success, Failed}.

    Only intent-level operations mutate state. Each change of the debounced
    term, page or genre starts a new fetch cycle stamped with a generation
    number; a response is applied only if its generation is still the
    latest. Superseded fetches are left to finish and their results dropped.

    Args:
        catalog: Catalog client used for every cycle.
        recorder: Optional trend recorder, called after successful searches.
        debounce_seconds: Settle delay for raw term input.
    """

    def __init__(
        self,
        catalog: CatalogClientPort,
        recorder: TrendRecorder | None = None,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._catalog = catalog
        self._recorder = recorder
        self._debouncer: Debouncer[str] = Debouncer(
            self._apply_debounced_term, delay=debounce_seconds
        )
        self._state = SearchState()
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._started = False
        self._closed = False

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def state(self) -> SearchState:
        return self._state

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Issue the initial (unfiltered) fetch. Idempotent."""
        if self._started:
            return
        self._started = True
        self._refetch()

    def set_term(self, raw_term: str) -> None:
        """Record raw input; propagation is debounced."""
        if raw_term == self._state.raw_term:
            return
        self._update(raw_term=raw_term)
        self._debouncer.push(raw_term)

    async def flush_term(self) -> None:
        """Propagate pending raw input without waiting for the settle delay."""
        await self._debouncer.flush()

    def set_page(self, page: int) -> None:
        target = clamp_page(page, self._state.total_pages)
        if target == self._state.page:
            return
        self._update(page=target)
        self._refetch()

    def next_page(self) -> None:
        if not self._state.can_go_next:
            return
        self.set_page(self._state.page + 1)

    def prev_page(self) -> None:
        if not self._state.can_go_prev:
            return
        self.set_page(self._state.page - 1)

    def set_genre(self, genre_id: str | None) -> None:
        """Select a genre ("" / None = all genres) and restart at page 1."""
        normalized = str(genre_id) if genre_id else None
        if normalized == self._state.selected_genre_id:
            return
        self._update(selected_genre_id=normalized, page=1)
        self._refetch()

    async def wait_idle(self) -> None:
        """Wait for the debounce timer and every outstanding cycle to finish."""
        await self._debouncer.wait()
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Drop pending input and stop outstanding cycles."""
        self._closed = True
        self._debouncer.cancel()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _update(self, **changes: object) -> None:
        self._state = dataclasses.replace(self._state, **changes)

    async def _apply_debounced_term(self, term: str) -> None:
        if self._closed or term == self._state.debounced_term:
            return
        self._update(debounced_term=term, page=1)
        self._refetch()

    def _refetch(self) -> None:
        if self._closed:
            return
        self._started = True
        self._generation += 1
        generation = self._generation
        state = self._state
        request = build_discover_request(
            state.debounced_term, state.page, state.selected_genre_id
        )
        self._update(is_loading=True, error_message=None, generation=generation)
        log.debug(
            "search_cycle_started",
            generation=generation,
            term=state.debounced_term,
            page=state.page,
            genre_id=state.selected_genre_id,
        )

        task = asyncio.get_running_loop().create_task(
            self._run_cycle(generation, state.debounced_term, request)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _is_current(self, generation: int) -> bool:
        if generation == self._generation:
            return True
        log.debug(
            "search_response_discarded",
            generation=generation,
            latest=self._generation,
        )
        return False

    async def _run_cycle(self, generation: int, term: str, request: CatalogRequest) -> None:
        try:
            page = await self._catalog.fetch(request)
        except FetchFailed as e:
            if self._is_current(generation):
                log.error(
                    "search_fetch_failed",
                    generation=generation,
                    status=e.status,
                    error=str(e),
                )
                self._update(is_loading=False, error_message=GENERIC_ERROR_MESSAGE)
            return
        except Exception:
            if self._is_current(generation):
                log.error(
                    "search_fetch_unexpected_error",
                    generation=generation,
                    exc_info=True,
                )
                self._update(is_loading=False, error_message=GENERIC_ERROR_MESSAGE)
            return

        if not self._is_current(generation):
            return

        self._update(
            results=page.results,
            total_pages=page.total_pages,
            is_loading=False,
        )
        log.info(
            "search_cycle_succeeded",
            generation=generation,
            term=term,
            page=self._state.page,
            total_pages=page.total_pages,
            results=len(page.results),
        )

        if self._state.page > page.total_pages:
            # Fewer pages than the one requested: move to the last page.
            self._update(page=page.total_pages)
            self._refetch()
            return

        if term and page.results and self._recorder is not None:
            outcome = await self._recorder.record(term, page.results[0])
            if not outcome.ok:
                log.debug("search_trend_not_recorded", term=term)
