"""Connection health supervision.

The receiver gives no sign when a TCP link silently dies, so after a quiet
period the supervisor sends a bare line terminator and waits briefly for an
answer. No answer means the link is reopened.
"""

import logging
from collections.abc import Awaitable, Callable

from .enums import SupervisorState
from .exceptions import PioneerException
from .framer import TERMINATOR
from .scheduler import Scheduler
from .transport import Transport

_LOGGER = logging.getLogger(__name__)

QUIET_INTERVAL = 120.0
WRITE_INTERVAL = 13.0
PROBE_TIMEOUT = 2.0
PROBE = TERMINATOR


class ConnectionSupervisor:
    """Watchdog probing the link after periods without traffic.

    Only one probe timer is pending at any time. Every reschedule bumps a
    generation counter; a timer that fires with an older generation does
    nothing.

    Args:
        scheduler: Timer service.
        transport: Transport the probe is sent over.
        on_reply: Receives the bytes answering a probe.
        reopen: Closes and reopens the link, returns whether it succeeded.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        transport: Transport,
        on_reply: Callable[[bytes], None],
        reopen: Callable[[], Awaitable[bool]],
    ) -> None:
        self._scheduler = scheduler
        self._transport = transport
        self._on_reply = on_reply
        self._reopen = reopen
        self._enabled = False
        self._generation = 0
        self._next_probe: float | None = None
        self.state = SupervisorState.IDLE
        self.probes = 0
        self.reopens = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def next_probe(self) -> float | None:
        """Time of the pending probe, ``None`` if none is pending."""
        return self._next_probe

    def enable(self) -> None:
        self._enabled = True
        self._schedule(self._scheduler.now() + QUIET_INTERVAL)

    def disable(self) -> None:
        self._enabled = False
        self._cancel()
        if self.state != SupervisorState.PROBING:
            self.state = SupervisorState.IDLE

    def traffic_seen(self) -> None:
        """Any data was read from the link."""
        if not self._enabled:
            return
        self._schedule(self._scheduler.now() + QUIET_INTERVAL)

    def write_seen(self) -> None:
        """A line was written; silence after a write is suspicious sooner."""
        if not self._enabled:
            return
        when = self._scheduler.now() + WRITE_INTERVAL
        if self._next_probe is None or self._next_probe > when:
            self._schedule(when)

    def _cancel(self) -> None:
        self._generation += 1
        self._next_probe = None
        self._scheduler.cancel_all(self)

    def _schedule(self, when: float) -> None:
        self._cancel()
        generation = self._generation
        self._next_probe = when
        if self.state == SupervisorState.IDLE:
            self.state = SupervisorState.WATCHING
        self._scheduler.schedule_at(self, when, lambda: self._fire(generation))

    def _fire(self, generation: int) -> Awaitable[None] | None:
        if generation != self._generation or not self._enabled:
            _LOGGER.debug("Ignoring stale connection probe timer")
            return None
        self._next_probe = None
        return self.probe()

    async def probe(self) -> None:
        """Check the link now, reopening it if the receiver does not answer."""
        self.state = SupervisorState.PROBING
        self.probes += 1
        _LOGGER.debug("Probing connection")
        try:
            try:
                reply = await self._transport.expect(PROBE, PROBE_TIMEOUT)
            except PioneerException as exception:
                _LOGGER.debug("Probe could not be sent: %s", exception)
                reply = None

            if not self._enabled:
                _LOGGER.debug("Connection checking disabled during probe")
                return
            if reply:
                _LOGGER.debug("Probe answered with %r", reply)
                self._on_reply(reply)
            else:
                _LOGGER.warning("No answer to connection probe, reopening connection")
                self.reopens += 1
                await self._reopen()
        finally:
            self.state = SupervisorState.WATCHING if self._enabled else SupervisorState.IDLE
            if self._enabled:
                self._schedule(self._scheduler.now() + QUIET_INTERVAL)
