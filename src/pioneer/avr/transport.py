"""Byte transports to the receiver.

Incoming data is pushed to a receiver callback as it arrives. `expect`
writes a request and captures the next chunk of incoming data instead of
delivering it to the receiver, which is what the connection probe uses.
"""

import asyncio
import logging
from collections.abc import Callable

from .exceptions import ConnectionFailed, NotConnectedException

_LOGGER = logging.getLogger(__name__)
_CONNECT_TIMEOUT = 5.0

DEFAULT_PORT = 8102

Receiver = Callable[[bytes], None]
LostHandler = Callable[[Exception | None], None]


class Transport:
    """Interface of a transport the session can drive."""

    _receiver: Receiver | None = None
    _lost_handler: LostHandler | None = None

    def set_receiver(self, receiver: Receiver | None) -> None:
        self._receiver = receiver

    def set_lost_handler(self, handler: LostHandler | None) -> None:
        self._lost_handler = handler

    @property
    def connected(self) -> bool:
        raise NotImplementedError()

    async def open(self) -> None:
        raise NotImplementedError()

    def close(self) -> None:
        raise NotImplementedError()

    def write(self, data: bytes) -> None:
        raise NotImplementedError()

    async def expect(self, data: bytes, timeout: float) -> bytes | None:
        """Write ``data`` and return the next received chunk, ``None`` on timeout."""
        raise NotImplementedError()


class _ConnectionProtocol(asyncio.Protocol):
    """One TCP connection, reporting back to its `TcpTransport`."""

    def __init__(self, owner: "TcpTransport") -> None:
        self._owner = owner
        self.transport: asyncio.Transport | None = None

    def connection_made(self, transport) -> None:
        """Method from asyncio.Protocol"""
        self.transport = transport

    def data_received(self, data: bytes) -> None:
        """Method from asyncio.Protocol"""
        self._owner._data_received(self, data)

    def connection_lost(self, exc: Exception | None) -> None:
        """Method from asyncio.Protocol"""
        self._owner._connection_lost(self, exc)


class TcpTransport(Transport):
    """TCP connection to the receiver's control port.

    Each `open` creates a new connection; events of a connection that was
    closed in the meantime are ignored.

    Args:
        host: Hostname or IP address of the receiver.
        port: TCP port (default 8102).
    """

    def __init__(self, host: str, port: int = DEFAULT_PORT) -> None:
        self._host = host
        self._port = port
        self._protocol: _ConnectionProtocol | None = None
        self._expecting: asyncio.Future[bytes] | None = None

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    def __repr__(self) -> str:
        return f"TcpTransport({self._host}:{self._port})"

    @property
    def connected(self) -> bool:
        return (
            self._protocol is not None
            and self._protocol.transport is not None
            and not self._protocol.transport.is_closing()
        )

    async def open(self) -> None:
        if self.connected:
            raise ConnectionFailed("Already connected")

        _LOGGER.debug("Connecting to %s:%d", self._host, self._port)
        loop = asyncio.get_running_loop()
        try:
            async with asyncio.timeout(_CONNECT_TIMEOUT):
                _, protocol = await loop.create_connection(
                    lambda: _ConnectionProtocol(self), self._host, self._port
                )
        except TimeoutError as exception:
            raise ConnectionFailed(f"Timeout connecting to {self._host}:{self._port}") from exception
        except OSError as exception:
            raise ConnectionFailed(f"Unable to connect to {self._host}:{self._port}") from exception
        self._protocol = protocol
        _LOGGER.info("Connected to %s:%d", self._host, self._port)

    def close(self) -> None:
        protocol, self._protocol = self._protocol, None
        self._fail_expect()
        if protocol is not None and protocol.transport is not None:
            _LOGGER.info("Disconnecting from %s:%d", self._host, self._port)
            protocol.transport.close()

    def write(self, data: bytes) -> None:
        if not self.connected:
            raise NotConnectedException()
        assert self._protocol and self._protocol.transport
        self._protocol.transport.write(data)

    async def expect(self, data: bytes, timeout: float) -> bytes | None:
        if not self.connected:
            return None
        future: asyncio.Future[bytes] = asyncio.get_running_loop().create_future()
        self._expecting = future
        try:
            self.write(data)
            async with asyncio.timeout(timeout):
                return await future
        except TimeoutError:
            return None
        finally:
            self._expecting = None

    def _fail_expect(self) -> None:
        if self._expecting is not None and not self._expecting.done():
            self._expecting.set_exception(TimeoutError())

    def _data_received(self, protocol: _ConnectionProtocol, data: bytes) -> None:
        if protocol is not self._protocol:
            return
        if self._expecting is not None and not self._expecting.done():
            self._expecting.set_result(data)
            return
        if self._receiver:
            self._receiver(data)

    def _connection_lost(self, protocol: _ConnectionProtocol, exc: Exception | None) -> None:
        if protocol is not self._protocol:
            return
        self._protocol = None
        self._fail_expect()
        _LOGGER.warning("Connection to %s:%d lost: %s", self._host, self._port, exc)
        if self._lost_handler:
            self._lost_handler(exc)
