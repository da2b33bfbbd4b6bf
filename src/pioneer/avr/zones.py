"""Routing of zone2, zone3 and hdZone lines to their consumers.

Lines owned by a secondary zone are not decoded by the primary session. The
router hands them to whichever consumers claim them, asking the registry to
provision one when the zone has none yet.
"""

import logging
import re
from collections.abc import Callable

from .dataclasses import InputChannel
from .decoder import ZONE_PATTERNS
from .enums import PowerState, Zone
from .events import ZoneMessage
from .state import InputChannelTable, Readings

_LOGGER = logging.getLogger(__name__)

ProvisioningListener = Callable[[Zone], None]

# Line prefixes per zone: volume, mute, input, power.
_ZONE_PREFIXES = {
    Zone.ZONE2: ("ZV", "Z2MUT", "Z2F", "APR"),
    Zone.ZONE3: ("YV", "Z3MUT", "Z3F", "BPR"),
    Zone.HDZONE: (None, None, "ZEA", "ZEP"),
}

ZONE_VOLUME_MAX = 81


class ZoneConsumer:
    """Anything that wants to receive raw lines of one zone."""

    zone: Zone

    def matches(self, line: str) -> bool:
        raise NotImplementedError()

    def receive(self, line: str) -> None:
        raise NotImplementedError()


class ZoneState(ZoneConsumer):
    """Readings of a secondary zone.

    Decodes volume (0-81, with 81 meaning 0 dB), mute, input and power
    lines of its zone into its own `Readings`.
    """

    def __init__(self, zone: Zone, inputs: InputChannelTable | None = None) -> None:
        if zone == Zone.MAIN:
            raise ValueError("The main zone is handled by the session itself")
        self.zone = zone
        self.readings = Readings()
        self.power_state = PowerState.UNKNOWN
        self._inputs = inputs
        self._pattern = ZONE_PATTERNS[zone]
        volume, mute, input_, power = _ZONE_PREFIXES[zone]
        self._volume = re.compile(rf"^{volume}(\d\d)$") if volume else None
        self._mute = re.compile(rf"^{mute}(\d)$") if mute else None
        self._input = re.compile(rf"^{input_}(\d\d)$")
        self._power = re.compile(rf"^{power}([01])$")

    def matches(self, line: str) -> bool:
        return self._pattern.match(line) is not None

    def receive(self, line: str) -> None:
        with self.readings.update():
            self._decode(line)

    def _decode(self, line: str) -> None:
        m = self._volume.match(line) if self._volume else None
        if m:
            raw = int(m.group(1))
            self.readings.bulk_update("volumeStraight", raw - ZONE_VOLUME_MAX)
            self.readings.bulk_update("volume", raw * 100 // ZONE_VOLUME_MAX)
            return

        m = self._mute.match(line) if self._mute else None
        if m:
            value = m.group(1)
            self.readings.bulk_update("mute", {"0": "on", "1": "off"}.get(value, value))
            return

        m = self._input.match(line)
        if m:
            channel: InputChannel | None = self._inputs.get(m.group(1)) if self._inputs else None
            name = channel.display_name if channel is not None else None
            self.readings.bulk_update("input", name or line)
            return

        m = self._power.match(line)
        if m:
            self.power_state = PowerState.ON if m.group(1) == "0" else PowerState.OFF
            self.readings.bulk_update("power", self.power_state.value)
            self.readings.bulk_update("state", self.power_state.value)
            return

        _LOGGER.debug("%s: unhandled line %r", self.zone.value, line)

    def __repr__(self) -> str:
        return f"ZoneState({self.zone.value}, {self.readings.to_dict()})"


class ZoneRegistry:
    """Directory of zone consumers owned by one session.

    Args:
        auto_create: Register a `ZoneState` whenever a zone is requested.
        inputs: Input table used by auto created zones to name inputs.
    """

    def __init__(self, auto_create: bool = True, inputs: InputChannelTable | None = None) -> None:
        self._consumers: dict[Zone, list[ZoneConsumer]] = {}
        self._provisioning: set[ProvisioningListener] = set()
        self._auto_create = auto_create
        self._inputs = inputs

    def lookup(self, zone: Zone) -> ZoneConsumer | None:
        consumers = self._consumers.get(zone)
        return consumers[0] if consumers else None

    def register(self, consumer: ZoneConsumer) -> None:
        self._consumers.setdefault(consumer.zone, []).append(consumer)

    def unregister(self, consumer: ZoneConsumer) -> None:
        consumers = self._consumers.get(consumer.zone, [])
        if consumer in consumers:
            consumers.remove(consumer)

    def consumers(self) -> list[ZoneConsumer]:
        return [consumer for consumers in self._consumers.values() for consumer in consumers]

    def add_provisioning_listener(self, listener: ProvisioningListener) -> None:
        self._provisioning.add(listener)

    def remove_provisioning_listener(self, listener: ProvisioningListener) -> None:
        self._provisioning.discard(listener)

    def request_registration(self, zone: Zone) -> None:
        """Ask for a consumer for ``zone`` to be provisioned."""
        _LOGGER.info("No consumer for %s, requesting registration", zone.value)
        for listener in list(self._provisioning):
            try:
                listener(zone)
            except Exception:
                _LOGGER.exception("Provisioning listener failed for %s", zone.value)
        if self._auto_create and self.lookup(zone) is None:
            self.register(ZoneState(zone, self._inputs))


class ZoneRouter:
    """Forwards zone lines, requesting provisioning for unknown zones."""

    def __init__(self, registry: ZoneRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ZoneRegistry:
        return self._registry

    def route(self, message: ZoneMessage) -> None:
        if self._registry.lookup(message.zone) is None:
            try:
                self._registry.request_registration(message.zone)
            except Exception:
                _LOGGER.exception("Registration request for %s failed", message.zone.value)

        for consumer in self._registry.consumers():
            if not consumer.matches(message.line):
                continue
            try:
                consumer.receive(message.line)
            except Exception:
                _LOGGER.exception("Zone consumer %s failed on %r", consumer, message.line)
