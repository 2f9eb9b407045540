"""In-memory registry of per-user search coordinators."""

from __future__ import annotations

import uuid
from collections import OrderedDict
from typing import Callable

import structlog

from moviescout.application.use_cases.search_coordinator import SearchCoordinator
from moviescout.domain.entities.errors import SessionNotFound

log = structlog.get_logger(__name__)

CoordinatorFactory = Callable[[], SearchCoordinator]


class SessionRegistry:
    """Maps session ids to live coordinators.

    Nothing is persisted. When ``max_sessions`` is reached the least recently
    used session is closed to make room.
    """

    def __init__(self, factory: CoordinatorFactory, max_sessions: int = 1000) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be >= 1")
        self._factory = factory
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, SearchCoordinator] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    async def create(self) -> tuple[str, SearchCoordinator]:
        while len(self._sessions) >= self._max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            await evicted.close()
            log.info("search_session_evicted", session_id=evicted_id)

        session_id = uuid.uuid4().hex
        coordinator = self._factory()
        self._sessions[session_id] = coordinator
        coordinator.start()
        log.info("search_session_created", session_id=session_id)
        return session_id, coordinator

    def get(self, session_id: str) -> SearchCoordinator:
        try:
            coordinator = self._sessions[session_id]
        except KeyError:
            raise SessionNotFound(session_id) from None
        self._sessions.move_to_end(session_id)
        return coordinator

    async def close(self, session_id: str) -> None:
        coordinator = self._sessions.pop(session_id, None)
        if coordinator is None:
            raise SessionNotFound(session_id)
        await coordinator.close()
        log.info("search_session_closed", session_id=session_id)

    async def close_all(self) -> None:
        while self._sessions:
            _, coordinator = self._sessions.popitem()
            await coordinator.close()
