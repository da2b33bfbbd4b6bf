"""Device state for the primary zone of a Pioneer receiver.

Provides `Readings`, a name to value mapping published in batches, the
`InputChannelTable` inventory of input channels, and `State` which projects
decoded events onto both. `State` is the only writer; everything else reads.
"""

import asyncio
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from .config import SessionConfig
from .dataclasses import InputChannel, NetworkSettings
from .enums import PowerState
from .events import (
    DeviceErrorReport,
    DisplayReport,
    Event,
    InputEnabledReport,
    InputLevelReport,
    InputNameReport,
    InputReport,
    InputTerminalReport,
    MacAddressReport,
    ModelReport,
    NetworkPortsReport,
    NetworkSettingsReport,
    NetworkStandbyReport,
    PowerReport,
    ReadingsReport,
    SoftwareVersionReport,
    TunerChannelNameReport,
    TunerPresetReport,
    UnknownLine,
    VolumeReport,
    ZoneMessage,
)
from .tables import DEFAULT_INPUT_NAMES, LINE_DATA_TYPES

_LOGGER = logging.getLogger(__name__)

ReadingsListener = Callable[[dict[str, Any]], None]


class Readings:
    """Named values published to listeners one batch at a time.

    Updates made between `begin_update` and `end_update` are visible through
    `current` immediately but only committed, and reported to listeners, at
    `end_update`. Updates made outside a batch are committed right away.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._pending: dict[str, Any] | None = None
        self._listeners: set[ReadingsListener] = set()

    def add_listener(self, listener: ReadingsListener) -> None:
        self._listeners.add(listener)

    def remove_listener(self, listener: ReadingsListener) -> None:
        self._listeners.discard(listener)

    @property
    def in_update(self) -> bool:
        return self._pending is not None

    def begin_update(self) -> None:
        if self._pending is not None:
            raise RuntimeError("Update already in progress")
        self._pending = {}

    def bulk_update(self, name: str, value: Any) -> None:
        if self._pending is None:
            self._commit({name: value})
        else:
            self._pending[name] = value

    def end_update(self) -> None:
        if self._pending is None:
            raise RuntimeError("No update in progress")
        pending, self._pending = self._pending, None
        self._commit(pending)

    @contextmanager
    def update(self) -> Iterator["Readings"]:
        """Run a batch; the batch is committed even if the body raises."""
        self.begin_update()
        try:
            yield self
        finally:
            self.end_update()

    def _commit(self, changes: dict[str, Any]) -> None:
        if not changes:
            return
        self._values.update(changes)
        for listener in list(self._listeners):
            try:
                listener(changes)
            except Exception:
                _LOGGER.exception("Readings listener %s failed", listener)

    def current(self, name: str, default: Any = None) -> Any:
        """Value including uncommitted updates of the running batch."""
        if self._pending is not None and name in self._pending:
            return self._pending[name]
        return self._values.get(name, default)

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)


class InputChannelTable:
    """Input channel inventory keyed by two digit channel code.

    Seeded with the factory default names, then refined by the inventory
    replies as they trickle in.
    """

    def __init__(self, defaults=DEFAULT_INPUT_NAMES) -> None:
        self._channels: dict[str, InputChannel] = {
            code: InputChannel(code, name) for code, name in defaults.items()
        }

    def get(self, code: str) -> InputChannel | None:
        return self._channels.get(code)

    def get_or_create(self, code: str) -> InputChannel:
        channel = self._channels.get(code)
        if channel is None:
            channel = InputChannel(code)
            self._channels[code] = channel
        return channel

    def __contains__(self, code: object) -> bool:
        return code in self._channels

    def __iter__(self) -> Iterator[InputChannel]:
        return iter(sorted(self._channels.values(), key=lambda c: c.code))

    def __len__(self) -> int:
        return len(self._channels)

    def code_for(self, name: str) -> str | None:
        """Find the channel code for an alias or canonical name."""
        for channel in self:
            if name in (channel.alias_name, channel.name):
                return channel.code
        return None

    def enabled_names(self) -> list[str]:
        return [
            channel.display_name for channel in self if channel.enabled and channel.display_name
        ]


class State:
    """Projection of decoded events onto the primary zone's state.

    Args:
        config: Volume ceilings used by the receive side volume clamp.
        send: Writes one payload to the receiver; used for the corrective
            volume write. May be ``None`` for a read-only projection.
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        send: Callable[[str], None] | None = None,
    ) -> None:
        self.config = config or SessionConfig()
        self._send = send
        self.readings = Readings()
        self.inputs = InputChannelTable()
        self.input_code: str | None = None
        self.tuner_channel_names: dict[str, str] = {}
        self.network_settings: NetworkSettings | None = None
        self.network_ports: tuple[int | None, ...] = ()
        self.mac_address: str | None = None
        self.model: str | None = None
        self.software_version: str | None = None
        self.network_standby: bool | None = None
        self.power_state = PowerState.UNKNOWN
        self._changed: asyncio.Event = asyncio.Event()
        self._handlers: dict[type, Callable[[Any], None]] = {
            ReadingsReport: self._apply_readings,
            VolumeReport: self._apply_volume,
            PowerReport: self._apply_power,
            InputReport: self._apply_input,
            DisplayReport: self._apply_display,
            InputNameReport: self._apply_input_name,
            InputTerminalReport: self._apply_input_terminal,
            InputEnabledReport: self._apply_input_enabled,
            InputLevelReport: self._apply_input_level,
            TunerChannelNameReport: self._apply_tuner_channel_name,
            TunerPresetReport: self._apply_tuner_preset,
            NetworkSettingsReport: self._apply_network_settings,
            NetworkPortsReport: self._apply_network_ports,
            MacAddressReport: self._apply_mac_address,
            ModelReport: self._apply_model,
            SoftwareVersionReport: self._apply_software_version,
            NetworkStandbyReport: self._apply_network_standby,
            DeviceErrorReport: self._apply_device_error,
            UnknownLine: self._apply_unknown,
        }
        self.readings.add_listener(self._readings_changed)

    def set_send(self, send: Callable[[str], None] | None) -> None:
        self._send = send

    def _readings_changed(self, changes: dict[str, Any]) -> None:
        self._changed.set()

    async def wait_changed(self) -> None:
        """Wait until a batch of readings has been published."""
        await self._changed.wait()
        self._changed.clear()

    def apply(self, event: Event) -> None:
        """Project one event. Zone messages are not handled here."""
        if isinstance(event, ZoneMessage):
            _LOGGER.debug("Ignoring %s line %r", event.zone.value, event.line)
            return
        handler = self._handlers.get(type(event))
        if handler is None:
            _LOGGER.debug("No handler for %s", event)
            return
        handler(event)

    def get(self, name: str, default: Any = None) -> Any:
        return self.readings.get(name, default)

    @property
    def input_name(self) -> str | None:
        return self.readings.get("input")

    def to_dict(self) -> dict[str, Any]:
        return {
            "readings": self.readings.to_dict(),
            "power": self.power_state.value,
            "input": self.input_code,
            "inputs": [channel.to_dict() for channel in self.inputs],
            "network": self.network_settings.to_dict() if self.network_settings else None,
            "networkPorts": list(self.network_ports),
            "macAddress": self.mac_address,
            "model": self.model,
            "softwareVersion": self.software_version,
            "networkStandby": self.network_standby,
        }

    def __repr__(self) -> str:
        return f"State ({self.to_dict()})"

    # --- Readings ---

    def _apply_readings(self, event: ReadingsReport) -> None:
        for name, value in event.readings.items():
            self.readings.bulk_update(name, value)

    def _apply_volume(self, event: VolumeReport) -> None:
        self.readings.bulk_update("volumeStraight", event.db)
        self.readings.bulk_update("volume", event.percent)

        if not self.config.exceeds_limit(event.db):
            return
        raw = int((80.5 + self.config.effective_limit_db) * 2)
        _LOGGER.info(
            "Volume %s%% (%s dB) above limit, setting to %s dB",
            event.percent,
            event.db,
            self.config.effective_limit_db,
        )
        if self._send is None:
            _LOGGER.warning("Unable to correct volume, no writer available")
            return
        self._send(f"{raw:03d}VL")

    def _apply_power(self, event: PowerReport) -> None:
        self.power_state = PowerState.ON if event.on else PowerState.OFF
        value = self.power_state.value
        self.readings.bulk_update("power", value)
        self.readings.bulk_update("state", value)

    def _apply_input(self, event: InputReport) -> None:
        channel = self.inputs.get(event.channel)
        name = channel.display_name if channel is not None else None
        self.input_code = event.channel
        self.readings.bulk_update("input", name or event.line)
        # now playing data belongs to the previous input
        for reading in LINE_DATA_TYPES.values():
            self.readings.bulk_update(reading, "")

    def _apply_display(self, event: DisplayReport) -> None:
        self.readings.bulk_update("displayPrevious", self.readings.current("display", ""))
        self.readings.bulk_update("display", event.text)

    # --- Input inventory ---

    def _apply_input_name(self, event: InputNameReport) -> None:
        channel = self.inputs.get_or_create(event.channel)
        if event.is_alias:
            channel.alias_name = event.name
        else:
            channel.name = event.name

    def _apply_input_terminal(self, event: InputTerminalReport) -> None:
        channel = self.inputs.get_or_create(event.channel)
        setattr(channel, f"{event.kind.value}_terminal", event.terminal)

    def _apply_input_enabled(self, event: InputEnabledReport) -> None:
        self.inputs.get_or_create(event.channel).enabled = event.enabled

    def _apply_input_level(self, event: InputLevelReport) -> None:
        self.inputs.get_or_create(event.channel).input_level_adjust = event.db

    # --- Tuner ---

    def _apply_tuner_channel_name(self, event: TunerChannelNameReport) -> None:
        self.tuner_channel_names[event.preset] = event.name

    def _apply_tuner_preset(self, event: TunerPresetReport) -> None:
        self.readings.bulk_update("channelStraight", event.preset)
        self.readings.bulk_update("channelName", self.tuner_channel_names.get(event.preset, ""))
        self.readings.bulk_update("channel", event.number if event.preset_class == "A" else "-")

    # --- Device information ---

    def _apply_network_settings(self, event: NetworkSettingsReport) -> None:
        self.network_settings = event.settings

    def _apply_network_ports(self, event: NetworkPortsReport) -> None:
        self.network_ports = event.ports

    def _apply_mac_address(self, event: MacAddressReport) -> None:
        self.mac_address = event.mac_address

    def _apply_model(self, event: ModelReport) -> None:
        self.model = event.model

    def _apply_software_version(self, event: SoftwareVersionReport) -> None:
        self.software_version = event.version

    def _apply_network_standby(self, event: NetworkStandbyReport) -> None:
        self.network_standby = event.enabled

    def _apply_device_error(self, event: DeviceErrorReport) -> None:
        if event.code is None:
            _LOGGER.info("Receiver reported unknown error %r", event.line)
        else:
            _LOGGER.info("Receiver reported %s: %s", event.code.value, event.code.description)

    def _apply_unknown(self, event: UnknownLine) -> None:
        _LOGGER.debug("Unhandled line %r", event.line)
