"""Debouncer for rapidly-changing input values."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

import structlog

log = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_DEBOUNCE_SECONDS = 0.5


class Debouncer(Generic[T]):
    """Propagates a value only after input has been quiet for ``delay`` seconds.

    Every ``push()`` cancels the pending timer and starts a new one, so only
    the last value of a burst reaches ``callback``. Intermediate values are
    never queued.

    Args:
        callback: Async function receiving the settled value.
        delay: Settle delay in seconds.
    """

    def __init__(
        self,
        callback: Callable[[T], Awaitable[None]],
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self._callback = callback
        self._delay = delay
        self._task: asyncio.Task[None] | None = None
        self._pending: tuple[T] | None = None

    def push(self, value: T) -> None:
        """Record a new input value and restart the settle timer."""
        self._cancel_timer()
        self._pending = (value,)
        self._task = asyncio.get_running_loop().create_task(self._fire_after_delay())

    def cancel(self) -> None:
        """Drop the pending value without propagating it."""
        self._cancel_timer()
        self._pending = None

    async def flush(self) -> None:
        """Propagate the pending value immediately, if any."""
        self._cancel_timer()
        await self._emit()

    async def wait(self) -> None:
        """Wait until no timer is pending (restarts while waiting included)."""
        while self._task is not None and not self._task.done():
            task = self._task
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                # Superseded by a restart; the waiter itself was not cancelled.
                if not task.cancelled():
                    raise

    def _cancel_timer(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _fire_after_delay(self) -> None:
        await asyncio.sleep(self._delay)
        # Past this point a push() must not cancel the running callback.
        self._task = None
        await self._emit()

    async def _emit(self) -> None:
        if self._pending is None:
            return
        (value,) = self._pending
        self._pending = None
        log.debug("debounce_settled", delay=self._delay)
        await self._callback(value)
