"""Timer service used by the session.

Callbacks are scheduled at absolute times and grouped by owner, so an owner
can drop all its pending callbacks at once. A callback may return an
awaitable; the scheduler runs it as a task.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

_LOGGER = logging.getLogger(__name__)

TimerCallback = Callable[[], Awaitable[Any] | None]


class Scheduler:
    """Interface of the timer service."""

    def now(self) -> float:
        raise NotImplementedError()

    def schedule_at(self, owner: object, when: float, callback: TimerCallback) -> None:
        raise NotImplementedError()

    def cancel_all(self, owner: object) -> None:
        """Drop pending callbacks of ``owner``. Already running ones continue."""
        raise NotImplementedError()


class LoopScheduler(Scheduler):
    """Scheduler on top of the asyncio event loop clock.

    Args:
        loop: Loop to use, defaults to the running loop at first use.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._handles: dict[object, set[asyncio.TimerHandle]] = {}
        self._tasks: set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time()

    def schedule_at(self, owner: object, when: float, callback: TimerCallback) -> None:
        handles = self._handles.setdefault(owner, set())

        def fire() -> None:
            handles.discard(handle)
            self._run(callback)

        handle = self.loop.call_at(when, fire)
        handles.add(handle)

    def cancel_all(self, owner: object) -> None:
        for handle in self._handles.pop(owner, set()):
            handle.cancel()

    def _run(self, callback: TimerCallback) -> None:
        result = callback()
        if not inspect.isawaitable(result):
            return
        task = asyncio.ensure_future(result)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exception = task.exception()
        if exception is not None:
            _LOGGER.error("Scheduled callback failed", exc_info=exception)

    async def close(self) -> None:
        """Cancel every pending callback and running task."""
        for owner in list(self._handles):
            self.cancel_all(owner)
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
