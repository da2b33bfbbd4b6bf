"""Shared test fixtures."""

import inspect

import pytest

from pioneer.avr.client import Client
from pioneer.avr.exceptions import ConnectionFailed, NotConnectedException
from pioneer.avr.scheduler import Scheduler
from pioneer.avr.transport import Transport


class FakeTransport(Transport):
    """In-memory transport recording every write."""

    def __init__(self) -> None:
        self.written: list[bytes] = []
        self.expected: list[tuple[bytes, float]] = []
        self.expect_reply: bytes | None = b"R\r\n"
        self.fail_open = False
        self.opens = 0
        self.closes = 0
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def payloads(self) -> list[str]:
        """Written lines without their terminator."""
        return [data.decode("latin-1")[:-2] for data in self.written]

    async def open(self) -> None:
        self.opens += 1
        if self.fail_open:
            raise ConnectionFailed("Refused")
        self._connected = True

    def close(self) -> None:
        self.closes += 1
        self._connected = False

    def write(self, data: bytes) -> None:
        if not self._connected:
            raise NotConnectedException()
        self.written.append(data)

    async def expect(self, data: bytes, timeout: float) -> bytes | None:
        self.expected.append((data, timeout))
        if not self._connected:
            return None
        return self.expect_reply

    def feed(self, data: bytes) -> None:
        assert self._receiver
        self._receiver(data)

    def lose(self) -> None:
        self._connected = False
        if self._lost_handler:
            self._lost_handler(None)


class FakeScheduler(Scheduler):
    """Scheduler with a manually advanced clock."""

    def __init__(self) -> None:
        self.time = 0.0
        self._timers: list[tuple[float, int, object, object]] = []
        self._counter = 0

    def now(self) -> float:
        return self.time

    def schedule_at(self, owner, when, callback) -> None:
        self._timers.append((when, self._counter, owner, callback))
        self._counter += 1

    def cancel_all(self, owner) -> None:
        self._timers = [timer for timer in self._timers if timer[2] is not owner]

    def pending(self, owner=None) -> list[float]:
        return sorted(
            timer[0] for timer in self._timers if owner is None or timer[2] is owner
        )

    async def advance(self, seconds: float) -> None:
        """Move the clock, firing and awaiting every callback that falls due."""
        target = self.time + seconds
        while True:
            due = [timer for timer in self._timers if timer[0] <= target]
            if not due:
                break
            timer = min(due)
            self._timers.remove(timer)
            self.time = max(self.time, timer[0])
            result = timer[3]()
            if inspect.isawaitable(result):
                await result
        self.time = target


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def make_client(transport, scheduler):
    """Factory fixture to create a started Client on the fake transport."""

    async def _make_client(config=None, **kwargs):
        client = Client(
            transport=transport,
            scheduler=scheduler,
            config=config,
            throttle_delay=0,
            **kwargs,
        )
        await client.start()
        return client

    return _make_client
