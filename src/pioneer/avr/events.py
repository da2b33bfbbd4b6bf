"""Typed events decoded from receiver lines."""

from typing import Any

import attr

from .dataclasses import NetworkSettings
from .enums import DeviceErrorCode, TerminalKind, Zone


@attr.s(frozen=True)
class Event:
    """Base class; ``line`` is the protocol line the event came from."""

    line: str = attr.ib()


@attr.s(frozen=True)
class ReadingsReport(Event):
    """Plain reading updates with no side effects."""

    readings: dict[str, Any] = attr.ib(factory=dict, hash=False)


@attr.s(frozen=True)
class VolumeReport(Event):
    raw: int = attr.ib()

    @property
    def db(self) -> float:
        return self.raw / 2 - 80.5

    @property
    def percent(self) -> int:
        return int(self.raw / 1.85)


@attr.s(frozen=True)
class PowerReport(Event):
    on: bool = attr.ib()


@attr.s(frozen=True)
class InputReport(Event):
    channel: str = attr.ib()


@attr.s(frozen=True)
class DisplayReport(Event):
    text: str = attr.ib()


@attr.s(frozen=True)
class InputNameReport(Event):
    channel: str = attr.ib()
    is_alias: bool = attr.ib()
    name: str = attr.ib()


@attr.s(frozen=True)
class InputTerminalReport(Event):
    channel: str = attr.ib()
    kind: TerminalKind = attr.ib()
    terminal: str = attr.ib()


@attr.s(frozen=True)
class InputEnabledReport(Event):
    channel: str = attr.ib()
    enabled: bool = attr.ib()


@attr.s(frozen=True)
class InputLevelReport(Event):
    channel: str = attr.ib()
    db: float = attr.ib()


@attr.s(frozen=True)
class TunerChannelNameReport(Event):
    preset: str = attr.ib()
    name: str = attr.ib()


@attr.s(frozen=True)
class TunerPresetReport(Event):
    preset_class: str = attr.ib()
    number: str = attr.ib()

    @property
    def preset(self) -> str:
        return self.preset_class + self.number


@attr.s(frozen=True)
class NetworkSettingsReport(Event):
    settings: NetworkSettings = attr.ib()


@attr.s(frozen=True)
class NetworkPortsReport(Event):
    """Up to four listening ports, ``None`` for a disabled port."""

    ports: tuple[int | None, ...] = attr.ib()


@attr.s(frozen=True)
class MacAddressReport(Event):
    mac_address: str = attr.ib()


@attr.s(frozen=True)
class ModelReport(Event):
    model: str = attr.ib()


@attr.s(frozen=True)
class SoftwareVersionReport(Event):
    version: str = attr.ib()


@attr.s(frozen=True)
class NetworkStandbyReport(Event):
    enabled: bool = attr.ib()


@attr.s(frozen=True)
class DeviceErrorReport(Event):
    code: DeviceErrorCode | None = attr.ib()


@attr.s(frozen=True)
class ZoneMessage(Event):
    """Line owned by a non-primary zone, passed through undecoded."""

    zone: Zone = attr.ib()


@attr.s(frozen=True)
class UnknownLine(Event):
    pass
