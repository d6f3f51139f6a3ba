from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """Collapses overlapping calls into one shared in-flight operation.

    The first caller starts the operation; callers arriving while it runs
    await the same future and receive the same result or exception. The
    handle is cleared as soon as the operation settles, so the next call
    starts a fresh attempt.
    """

    def __init__(self) -> None:
        self._inflight: asyncio.Future[T] | None = None

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        task = self._inflight
        if task is None:
            task = asyncio.ensure_future(self._settle(operation))
            task.add_done_callback(_consume_exception)
            self._inflight = task
        # A cancelled waiter must not cancel the fetch other waiters share.
        return await asyncio.shield(task)

    async def _settle(self, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            return await operation()
        finally:
            self._inflight = None


def _consume_exception(task: asyncio.Future) -> None:
    # Waiters may all be gone; mark the exception as retrieved.
    if not task.cancelled():
        task.exception()
