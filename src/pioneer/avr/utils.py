import asyncio
import heapq
import logging
import time

_LOGGER = logging.getLogger(__name__)


class Throttle:
    """Serializes command execution with minimum spacing and priority ordering.

    Lower *priority* values are dispatched first. Entries of equal priority
    are dispatched in the order they were queued.
    """

    def __init__(self, delay: float) -> None:
        self._timestamp = time.monotonic()
        self._delay = delay
        self._queue: list[tuple[int, int, asyncio.Future]] = []
        self._counter = 0
        self._lock = asyncio.Lock()

    @property
    def delay(self) -> float:
        return self._delay

    async def get(self, priority: int = 1) -> None:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[None] = loop.create_future()

        heapq.heappush(self._queue, (priority, self._counter, future))
        self._counter += 1

        if not self._lock.locked():
            asyncio.ensure_future(self._dispatch())

        await future

    async def _dispatch(self) -> None:
        async with self._lock:
            while self._queue:
                _, _, future = heapq.heappop(self._queue)
                if future.done():
                    continue

                now = time.monotonic()
                delay = self._timestamp - now
                if delay > 0:
                    await asyncio.sleep(delay)
                self._timestamp = time.monotonic() + self._delay

                if future.cancelled():
                    continue

                future.set_result(None)
