"""Line protocol server.

Provides Server, which accepts TCP connections and answers each received
line through registered handlers, and ServerContext to run it as an async
context manager.
"""

import asyncio
import contextlib
import logging
import re
from collections.abc import Callable

from .commands import encode
from .enums import DeviceErrorCode
from .framer import PROBE_ACK, TERMINATOR

_LOGGER = logging.getLogger(__name__)

Handler = Callable[..., str | list[str] | None]


class DeviceError(Exception):
    """Raised by handlers to answer with a receiver error code."""

    def __init__(self, code: DeviceErrorCode):
        self.code = code
        super().__init__(code.description)


class Server:
    """Receiver side of the line protocol.

    Handlers are registered for exact payloads or for regular expressions;
    exact matches take precedence. A handler returns the line(s) to answer
    with, or ``None`` to stay silent. An empty line is a connection probe
    and is acknowledged with ``R``.

    Args:
        host: Bind address for the TCP server.
        port: Port number, 0 picks a free port.
        model: Model name reported by the receiver.
    """

    def __init__(self, host: str, port: int, model: str) -> None:
        self._host = host
        self._port = port
        self._model = model
        self._server: asyncio.Server | None = None
        self._handlers: dict[str, Handler] = {}
        self._patterns: list[tuple[re.Pattern, Handler]] = []
        self._tasks: set[asyncio.Task] = set()
        self._writers: set[asyncio.StreamWriter] = set()

    @property
    def port(self) -> int:
        """Port actually bound, useful when started with port 0."""
        if self._server is None or not self._server.sockets:
            return self._port
        return self._server.sockets[0].getsockname()[1]

    def register_handler(self, command: str, handler: Handler) -> None:
        self._handlers[command] = handler

    def register_pattern(self, pattern: str, handler: Handler) -> None:
        """Register a handler called with the regex match groups as arguments."""
        self._patterns.append((re.compile(pattern), handler))

    def process_request(self, line: str) -> list[str]:
        line = line.strip()
        if line == "":
            return [PROBE_ACK]

        try:
            handler = self._handlers.get(line)
            if handler is not None:
                result = handler()
            else:
                for pattern, handler in self._patterns:
                    m = pattern.fullmatch(line)
                    if m:
                        result = handler(*m.groups())
                        break
                else:
                    _LOGGER.debug("No handler for %r", line)
                    return [DeviceErrorCode.COMMAND_ERROR.value]
        except DeviceError as exception:
            return [exception.code.value]

        if result is None:
            return []
        if isinstance(result, str):
            return [result]
        return result

    def broadcast(self, line: str) -> None:
        """Send an unsolicited line to every connected client."""
        for writer in list(self._writers):
            writer.write(encode(line))

    async def process(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        _LOGGER.debug("Client connected")
        self._writers.add(writer)
        try:
            while True:
                try:
                    data = await reader.readuntil(TERMINATOR)
                except asyncio.IncompleteReadError:
                    _LOGGER.debug("Client disconnected")
                    return

                line = data[: -len(TERMINATOR)].decode("latin-1")
                _LOGGER.debug("Request %r", line)
                for response in self.process_request(line):
                    _LOGGER.debug("Response %r", response)
                    writer.write(encode(response))
                await writer.drain()
        finally:
            self._writers.discard(writer)
            writer.close()

    async def process_runner(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        task = asyncio.current_task()
        assert task
        self._tasks.add(task)
        try:
            await self.process(reader, writer)
        except (ConnectionError, OSError) as exception:
            _LOGGER.debug("Client connection failed: %s", exception)
        finally:
            self._tasks.discard(task)

    async def start(self) -> None:
        _LOGGER.debug("Starting server")
        self._server = await asyncio.start_server(self.process_runner, self._host, self._port)

    async def stop(self) -> None:
        if self._server:
            _LOGGER.debug("Stopping server")
            tasks = list(self._tasks)
            for task in tasks:
                task.cancel()
            for task in tasks:
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            self._server.close()
            await self._server.wait_closed()
            self._server = None


class ServerContext:
    def __init__(self, server: Server) -> None:
        self._server = server

    async def __aenter__(self) -> Server:
        await self._server.start()
        return self._server

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._server.stop()
