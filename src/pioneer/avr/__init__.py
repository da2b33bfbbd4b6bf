"""Session layer for the Pioneer AV receiver line protocol."""

from .client import Client, ClientContext
from .config import SessionConfig
from .dataclasses import InputChannel, NetworkSettings
from .decoder import RULES, decode_line
from .enums import DeviceErrorCode, LinkState, PowerState, SupervisorState, TerminalKind, Zone
from .exceptions import (
    CommandNotAvailable,
    ConnectionFailed,
    NotConnectedException,
    PioneerException,
    UnknownCommand,
)
from .framer import LineFramer
from .scheduler import LoopScheduler, Scheduler
from .state import InputChannelTable, Readings, State
from .supervisor import ConnectionSupervisor
from .transport import DEFAULT_PORT, TcpTransport, Transport
from .zones import ZoneConsumer, ZoneRegistry, ZoneRouter, ZoneState

__all__ = [
    "DEFAULT_PORT",
    "RULES",
    "Client",
    "ClientContext",
    "CommandNotAvailable",
    "ConnectionFailed",
    "ConnectionSupervisor",
    "DeviceErrorCode",
    "InputChannel",
    "InputChannelTable",
    "LineFramer",
    "LinkState",
    "LoopScheduler",
    "NetworkSettings",
    "NotConnectedException",
    "PioneerException",
    "PowerState",
    "Readings",
    "Scheduler",
    "SessionConfig",
    "State",
    "SupervisorState",
    "TcpTransport",
    "TerminalKind",
    "Transport",
    "UnknownCommand",
    "ZoneConsumer",
    "ZoneRegistry",
    "ZoneRouter",
    "ZoneState",
    "decode_line",
]
