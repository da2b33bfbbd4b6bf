"""Session with a Pioneer receiver.

Provides Client, which frames and decodes incoming lines, projects them onto
the primary zone `State`, routes zone lines to their consumers and keeps the
link alive with a `ConnectionSupervisor`. Use ClientContext as an async
context manager to handle the connection lifecycle.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from contextlib import contextmanager

from . import commands
from .config import SessionConfig
from .decoder import decode_line
from .enums import LinkState, PowerState, Zone
from .events import Event, ZoneMessage
from .exceptions import ConnectionFailed, NotConnectedException, PioneerException, UnknownCommand
from .framer import LineFramer
from .scheduler import LoopScheduler, Scheduler
from .state import State
from .supervisor import ConnectionSupervisor
from .tables import PLAYER_COMMANDS, TUNER_COMMANDS
from .transport import DEFAULT_PORT, TcpTransport, Transport
from .utils import Throttle
from .zones import ZoneRegistry, ZoneRouter

_LOGGER = logging.getLogger(__name__)
_TRAFFIC_LOGGER = logging.getLogger("pioneer.avr.traffic")

_COMMAND_THROTTLE = 0.1
_POWER_ON_WAKE_DELAY = 0.1
_POWER_ON_REPEAT_DELAY = 0.2
_POWER_ON = "\n\rPO"

PRIORITY_COMMAND = 0
PRIORITY_QUERY = 1


class Client:
    """Protocol session with one receiver.

    Args:
        host: Hostname or IP address of the receiver, used when no
            ``transport`` is given.
        port: TCP port (default 8102).
        transport: Transport to use instead of a TCP connection.
        scheduler: Timer service, defaults to the event loop clock.
        config: Volume ceilings, health checking and traffic logging.
        registry: Zone consumers; defaults to a registry creating a
            `ZoneState` for every zone that shows up.
        throttle_delay: Minimum spacing of queued commands in seconds.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int = DEFAULT_PORT,
        *,
        transport: Transport | None = None,
        scheduler: Scheduler | None = None,
        config: SessionConfig | None = None,
        registry: ZoneRegistry | None = None,
        throttle_delay: float = _COMMAND_THROTTLE,
    ) -> None:
        if transport is None:
            if host is None:
                raise ValueError("Either host or transport is required")
            transport = TcpTransport(host, port)
        self.config = config or SessionConfig()
        self._transport = transport
        self._own_scheduler: LoopScheduler | None = None
        if scheduler is None:
            scheduler = self._own_scheduler = LoopScheduler()
        self._scheduler = scheduler
        self._framer = LineFramer()
        self._state = State(self.config, send=self._send_correction)
        self._registry = registry or ZoneRegistry(inputs=self._state.inputs)
        self._router = ZoneRouter(self._registry)
        self._supervisor = ConnectionSupervisor(
            self._scheduler, self._transport, self._framer.carry, self.reopen
        )
        self._throttle = Throttle(throttle_delay)
        self._link = LinkState.CLOSED
        self._listen: set[Callable[[Event], None]] = set()
        self._tasks: set[asyncio.Task] = set()

        self._transport.set_receiver(self.data_received)
        self._transport.set_lost_handler(self._connection_lost)

    # --- Properties ---

    @property
    def state(self) -> State:
        return self._state

    @property
    def registry(self) -> ZoneRegistry:
        return self._registry

    @property
    def supervisor(self) -> ConnectionSupervisor:
        return self._supervisor

    @property
    def framer(self) -> LineFramer:
        return self._framer

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def link(self) -> LinkState:
        return self._link

    @property
    def connected(self) -> bool:
        return self._link == LinkState.OPEN and self._transport.connected

    @property
    def status(self) -> str:
        """Summary of link and power state.

        One of ``uninitialized``, ``opened``, ``on``, ``off`` or
        ``disconnected``.
        """
        if self._link == LinkState.DISCONNECTED:
            return "disconnected"
        if self._link != LinkState.OPEN:
            return "uninitialized"
        if self._state.power_state == PowerState.UNKNOWN:
            return "opened"
        return self._state.power_state.value

    # --- Listeners ---

    def add_listener(self, listener: Callable[[Event], None]) -> None:
        self._listen.add(listener)

    def remove_listener(self, listener: Callable[[Event], None]) -> None:
        self._listen.remove(listener)

    @contextmanager
    def listen(self, listener: Callable[[Event], None]):
        self.add_listener(listener)
        yield self
        self.remove_listener(listener)

    # --- Lifecycle ---

    async def start(self) -> None:
        """Open the link and start connection supervision."""
        if self._link == LinkState.OPEN:
            raise PioneerException("Already started")
        await self._open()
        if self.config.check_connection:
            self._supervisor.enable()

    async def stop(self) -> None:
        """Stop supervision, pending commands and close the link."""
        self._supervisor.disable()
        if self._own_scheduler is not None:
            await self._own_scheduler.close()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._transport.close()
        self._link = LinkState.CLOSED

    async def _open(self) -> None:
        self._link = LinkState.OPENING
        self._framer.clear()
        try:
            await self._transport.open()
        except ConnectionFailed:
            self._link = LinkState.DISCONNECTED
            raise
        self._link = LinkState.OPEN

    async def reopen(self) -> bool:
        """Close and reopen the link; refresh all readings on success."""
        _LOGGER.warning("Reopening connection to %s", self._transport)
        self._transport.close()
        try:
            await self._open()
        except ConnectionFailed as exception:
            _LOGGER.error("Receiver is disconnected: %s", exception)
            return False
        _LOGGER.info("Connection to %s reopened", self._transport)
        self._spawn(self.status_update())
        return True

    def set_check_connection(self, enabled: bool) -> None:
        if enabled:
            self._supervisor.enable()
        else:
            self._supervisor.disable()

    def _connection_lost(self, exc: Exception | None) -> None:
        if self._link == LinkState.OPEN:
            _LOGGER.error("Receiver is disconnected")
            self._link = LinkState.DISCONNECTED

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exception = task.exception()
        if exception is not None:
            _LOGGER.error("Background command failed: %s", exception)

    # --- Receive side ---

    def data_received(self, data: bytes) -> None:
        """Process one read: all lines of it are published as one batch."""
        if not data:
            return
        self._log_traffic("Received %r", data)

        with self._state.readings.update():
            for line in self._framer.feed(data):
                event = decode_line(line)
                if isinstance(event, ZoneMessage):
                    self._router.route(event)
                else:
                    self._state.apply(event)
                for listener in list(self._listen):
                    try:
                        listener(event)
                    except Exception:
                        _LOGGER.exception("Event listener %s failed", listener)

        self._supervisor.traffic_seen()

    # --- Send side ---

    def _log_traffic(self, msg: str, data: bytes) -> None:
        if self.config.log_traffic is not None:
            _TRAFFIC_LOGGER.log(self.config.log_traffic, msg, data)

    def send(self, payload: str) -> None:
        """Write one line to the receiver (fire-and-forget)."""
        if not self.connected:
            raise NotConnectedException()
        data = commands.encode(payload)
        self._log_traffic("Sending %r", data)
        try:
            self._transport.write(data)
        except (ConnectionError, OSError) as exception:
            _LOGGER.error("Write to receiver failed: %s", exception)
            self._link = LinkState.DISCONNECTED
            raise ConnectionFailed() from exception
        self._supervisor.write_seen()

    def _send_correction(self, payload: str) -> None:
        try:
            self.send(payload)
        except PioneerException as exception:
            _LOGGER.warning("Unable to send %r: %s", payload, exception)

    async def _send_queued(self, payloads: Iterable[str], priority: int) -> None:
        for payload in payloads:
            await self._throttle.get(priority)
            self.send(payload)

    def set(self, name: str, *args, zone: Zone = Zone.MAIN) -> str:
        """Send a named command and return the payload written.

        Commands taking an argument (``volume``, ``input``, ``mute`` ...) are
        encoded by `commands`; anything else is looked up in the zone's
        command table.
        """
        payload = self._build(name, args, zone)
        self.send(payload)
        if zone == Zone.MAIN and name == "mute" and args and args[0] in ("on", "off"):
            self._state.readings.bulk_update("mute", args[0])
        return payload

    def _build(self, name: str, args: tuple, zone: Zone) -> str:
        input_code = self._state.input_code
        if zone != Zone.MAIN or not args:
            if zone == Zone.MAIN and name in PLAYER_COMMANDS:
                return commands.player(name, input_code)
            if zone == Zone.MAIN and name in TUNER_COMMANDS:
                return commands.tuner(name, input_code)
            return commands.lookup(zone, name)

        arg = args[0]
        if name == "raw":
            return " ".join(str(a) for a in args)
        if name == "volume":
            return commands.volume(float(arg), self.config)
        if name == "volumeStraight":
            return commands.volume_straight(float(arg), self.config)
        if name == "bass":
            return commands.bass(int(arg))
        if name == "treble":
            return commands.treble(int(arg))
        if name == "tone":
            return commands.tone(arg)
        if name == "mute":
            return commands.mute(arg)
        if name == "speakers":
            return commands.speakers(arg)
        if name == "signalSelect":
            return commands.signal_select(arg)
        if name == "listeningMode":
            return commands.listening_mode(arg)
        if name == "input":
            code = self._state.inputs.code_for(arg)
            if code is None:
                raise ValueError(f"Unknown input {arg!r}")
            return commands.input_select(code)
        if name == "channel":
            return commands.channel(arg, input_code)
        if name == "channelStraight":
            return commands.channel_straight(arg, input_code)
        if name == "remoteControl":
            return commands.remote_control(arg)
        raise UnknownCommand(zone.value, name)

    def get(self, name: str, zone: Zone = Zone.MAIN) -> str:
        """Ask the receiver for a reading; the answer arrives as a normal line."""
        payload = commands.query(zone, name)
        self.send(payload)
        return payload

    async def status_update(self, zones: Iterable[Zone] = Zone) -> None:
        """Query every reading of the given zones."""
        _LOGGER.debug("Requesting status of all zones")
        await self._send_queued(commands.status_queries(zones), PRIORITY_QUERY)

    async def load_input_names(self) -> None:
        """Query name, terminals, skip flag and level of every input channel."""
        _LOGGER.debug("Requesting input channel inventory")
        await self._send_queued(commands.inventory_queries(), PRIORITY_QUERY)

    async def power_on(self) -> None:
        """Wake the receiver and switch it on.

        The receiver needs an empty line and a short pause before it accepts
        commands out of network standby.
        """
        if self._state.network_standby is False:
            _LOGGER.warning(
                "Network standby is off on the receiver, it can not be switched on from standby"
            )
        await self._throttle.get(PRIORITY_COMMAND)
        self.send("")
        await asyncio.sleep(_POWER_ON_WAKE_DELAY)
        self.send("")
        await asyncio.sleep(_POWER_ON_WAKE_DELAY)
        self.send(_POWER_ON)
        await asyncio.sleep(_POWER_ON_REPEAT_DELAY)
        self.send(_POWER_ON)

    async def power_off(self) -> None:
        await self._throttle.get(PRIORITY_COMMAND)
        self.set("off")

    def input_names(self) -> list[str]:
        """Names of the enabled inputs, alias names where assigned."""
        return self._state.inputs.enabled_names()


class ClientContext:
    """Async context manager that starts and stops a Client.

    Usage::

        async with ClientContext(Client("192.168.1.10")) as client:
            await client.status_update()
    """

    def __init__(self, client: Client):
        self._client = client

    async def __aenter__(self) -> Client:
        await self._client.start()
        return self._client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._client.stop()
