"""Classifies receiver lines into typed events.

Rules are tried in order and the first match wins, so specific patterns
must come before broader ones. A rule whose pattern matches but whose
captured value is not part of the known vocabulary still produces an event
carrying the raw value: consumers always see forward progress.
"""

import logging
import re
from collections.abc import Callable
from types import MappingProxyType

import attr

from .dataclasses import NetworkSettings
from .enums import DeviceErrorCode, TerminalKind, Zone
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
from .tables import (
    AUDIO_TERMINALS,
    LINE_DATA_TYPES,
    LISTENING_MODES,
    LISTENING_MODES_PLAYING,
    SIGNAL_SELECT,
    SPEAKER_SYSTEMS,
    SPEAKERS,
)

_LOGGER = logging.getLogger(__name__)

PORT_DISABLED = 99999


@attr.s(frozen=True)
class Rule:
    name: str = attr.ib()
    pattern: re.Pattern = attr.ib(converter=re.compile)
    build: Callable[[str, re.Match], Event] = attr.ib()

    def match(self, line: str) -> re.Match | None:
        return self.pattern.match(line)


def normalize_name(name: str) -> str:
    """Turn a display name like ``TV/SAT`` into a reading style ``tvSat``."""
    name = re.sub(r"[^a-zA-Z 0-9]", " ", name)
    name = re.sub(r"[\w']+", lambda m: m.group(0).capitalize(), name)
    name = re.sub(r"\s", "", name)
    return name[:1].lower() + name[1:]


def tone_db(raw: str) -> int:
    """Bass and treble are sent inverted and offset: 06 is 0 dB, 00 is +6 dB."""
    return (-1 * int(raw)) + 6


def _volume(line: str, m: re.Match) -> Event:
    raw = m.group(1)
    if not re.fullmatch(r"\d{3}", raw, re.ASCII):
        _LOGGER.debug("Unexpected volume value in %r", line)
        return ReadingsReport(line, {"volume": line})
    return VolumeReport(line, int(raw))


def _tone(line: str, m: re.Match) -> Event:
    return ReadingsReport(line, {"tone": "on" if m.group(1) == "1" else "bypass"})


def _bass(line: str, m: re.Match) -> Event:
    return ReadingsReport(line, {"bass": tone_db(m.group(1))})


def _treble(line: str, m: re.Match) -> Event:
    return ReadingsReport(line, {"treble": tone_db(m.group(1))})


def _mute(line: str, m: re.Match) -> Event:
    value = m.group(1)
    if value == "1":
        return ReadingsReport(line, {"mute": "off"})
    if value == "0":
        return ReadingsReport(line, {"mute": "on"})
    return ReadingsReport(line, {"mute": value})


def _input(line: str, m: re.Match) -> Event:
    return InputReport(line, m.group(1))


def _input_name(line: str, m: re.Match) -> Event:
    return InputNameReport(line, m.group(1), m.group(2) == "1", normalize_name(m.group(3)))


def _audio_terminal(line: str, m: re.Match) -> Event:
    terminal = AUDIO_TERMINALS.get(m.group(2), m.group(2))
    return InputTerminalReport(line, m.group(1), TerminalKind.AUDIO, terminal)


def _hdmi_terminal(line: str, m: re.Match) -> Event:
    number = m.group(2)
    terminal = "No Assign" if number == "0" else f"hdmi {number}"
    return InputTerminalReport(line, m.group(1), TerminalKind.HDMI, terminal)


def _component_terminal(line: str, m: re.Match) -> Event:
    number = m.group(2)
    terminal = "No Assign" if number == "0" else f"component {number}"
    return InputTerminalReport(line, m.group(1), TerminalKind.COMPONENT, terminal)


def _input_enabled(line: str, m: re.Match) -> Event:
    # 1 means the receiver skips the input
    return InputEnabledReport(line, m.group(1), m.group(2) == "0")


def _input_level(line: str, m: re.Match) -> Event:
    return InputLevelReport(line, m.group(1), int(m.group(2)) / 2 - 25)


def _lookup(reading: str, table, key_group: int = 1) -> Callable[[str, re.Match], Event]:
    def build(line: str, m: re.Match) -> Event:
        key = m.group(key_group)
        value = table.get(key)
        if value is None:
            _LOGGER.debug("Unknown %s %r in %r", reading, key, line)
            value = line
        return ReadingsReport(line, {reading: value})

    return build


def _single_char(reading: str, table) -> Callable[[str, re.Match], Event]:
    def build(line: str, m: re.Match) -> Event:
        key = m.group(1)
        return ReadingsReport(line, {reading: table.get(key, key)})

    return build


def _power(line: str, m: re.Match) -> Event:
    value = m.group(1)
    if not value.isdigit():
        return ReadingsReport(line, {"power": value})
    return PowerReport(line, value == "0")


def _display(line: str, m: re.Match) -> Event:
    try:
        text = bytes.fromhex(m.group(1)[:28]).decode("latin-1")
    except ValueError:
        _LOGGER.debug("Undecodable display text in %r", line)
        return DisplayReport(line, line)
    return DisplayReport(line, text)


def _display_information(line: str, m: re.Match) -> Event:
    code = m.group(4)
    reading = LINE_DATA_TYPES.get(code)
    if reading is None:
        _LOGGER.debug("Unknown line data type %r in %r", code, line)
        reading = f"lineData{code}"
    return ReadingsReport(line, {reading: m.group(5)})


def _tuner_channel_name(line: str, m: re.Match) -> Event:
    return TunerChannelNameReport(line, m.group(1), m.group(2))


def _tuner_preset(line: str, m: re.Match) -> Event:
    return TunerPresetReport(line, m.group(1), m.group(2))


def _tuner_frequency(line: str, m: re.Match) -> Event:
    frequency = f"{m.group(2)}.{m.group(3)}"
    if m.group(1) == "1":
        frequency = "1" + frequency
    return ReadingsReport(line, {"tunerFrequency": frequency})


def _network_settings(line: str, m: re.Match) -> Event:
    return NetworkSettingsReport(line, NetworkSettings.from_fields(m.groups()))


def _network_ports(line: str, m: re.Match) -> Event:
    ports = tuple(
        None if int(port) == PORT_DISABLED else int(port) for port in m.groups()
    )
    return NetworkPortsReport(line, ports)


def _mac_address(line: str, m: re.Match) -> Event:
    return MacAddressReport(line, ":".join(m.groups()))


def _model(line: str, m: re.Match) -> Event:
    return ModelReport(line, m.group(1))


def _software_version(line: str, m: re.Match) -> Event:
    return SoftwareVersionReport(line, m.group(1))


def _error(line: str, m: re.Match) -> Event:
    return DeviceErrorReport(line, DeviceErrorCode.from_code(line))


def _network_standby(line: str, m: re.Match) -> Event:
    return NetworkStandbyReport(line, m.group(1) == "1")


def _zone(zone: Zone) -> Callable[[str, re.Match], Event]:
    def build(line: str, m: re.Match) -> Event:
        return ZoneMessage(line, zone)

    return build


ZONE_PATTERNS = MappingProxyType(
    {
        Zone.ZONE2: re.compile(r"^(?:ZV\d\d|Z2MUT\d|Z2F\d\d|APR[01])$"),
        Zone.ZONE3: re.compile(r"^(?:YV\d\d|Z3MUT\d|Z3F\d\d|BPR[01])$"),
        Zone.HDZONE: re.compile(r"^(?:ZEA\d\d|ZEP[01])$"),
    }
)

_SUL = r"^SUL(\d)" + r"(\d{3})" * 20 + r'(\d)(".*")(\d{5})$'

RULES: tuple[Rule, ...] = (
    Rule("volume", r"^VOL(.{3})", _volume),
    Rule("tone", r"^TO([01])$", _tone),
    Rule("bass", r"^BA(\d\d)$", _bass),
    Rule("treble", r"^TR(\d\d)$", _treble),
    Rule("mute", r"^MUT(.)", _mute),
    Rule("input", r"^FN(\d\d)$", _input),
    Rule("inputName", r"^RGB(\d\d)(\d)(.*)", _input_name),
    Rule("audioTerminal", r"^SSC(\d\d)00(\d\d)$", _audio_terminal),
    Rule("hdmiTerminal", r"^SSC(\d\d)010(\d)$", _hdmi_terminal),
    Rule("componentTerminal", r"^SSC(\d\d)020(\d)$", _component_terminal),
    Rule("inputEnabled", r"^SSC(\d\d)030([01])$", _input_enabled),
    Rule("inputLevelAdjust", r"^ILA(\d\d)(\d\d)$", _input_level),
    Rule("signalSelect", r"^SDA(.)", _single_char("signalSelect", SIGNAL_SELECT)),
    Rule("speakers", r"^SPK(.)", _single_char("speakers", SPEAKERS)),
    Rule("speakerSystem", r"^SSF(.{0,2})", _lookup("speakerSystem", SPEAKER_SYSTEMS)),
    Rule("listeningMode", r"^SR(.*)", _lookup("listeningMode", LISTENING_MODES)),
    Rule(
        "listeningModePlaying",
        r"^LM(.{0,4})",
        _lookup("listeningModePlaying", LISTENING_MODES_PLAYING),
    ),
    Rule("power", r"^PWR(.)", _power),
    Rule("display", r"^FL..(.*)", _display),
    Rule("displayInformation", r'^(GEH|GEI)(\d\d)(\d)(\d\d)"(.*)"$', _display_information),
    Rule("tunerChannelName", r'^TQ(\w\d)"(.{8})"$', _tuner_channel_name),
    Rule("tunerPreset", r"^PR(\w)0(\d)$", _tuner_preset),
    Rule("tunerFrequency", r"^FRF([01])(\d\d)(\d\d)$", _tuner_frequency),
    Rule("networkSettings", _SUL, _network_settings),
    Rule("networkPorts", r"^SUM(\d{5})(\d{5})(\d{5})(\d{5})$", _network_ports),
    Rule("macAddress", r"^SVB(.{2})(.{2})(.{2})(.{2})(.{2})(.{2})$", _mac_address),
    Rule("model", r"^RGD<\d{3}><(.*)/.*>$", _model),
    Rule("softwareVersion", r'^SSI"(.*)"$', _software_version),
    Rule("error", r"^E0(\d)$", _error),
    Rule("busy", r"^B00$", _error),
    Rule("networkStandby", r"^STJ([01])", _network_standby),
    Rule("zone2", ZONE_PATTERNS[Zone.ZONE2], _zone(Zone.ZONE2)),
    Rule("zone3", ZONE_PATTERNS[Zone.ZONE3], _zone(Zone.ZONE3)),
    Rule("hdZone", ZONE_PATTERNS[Zone.HDZONE], _zone(Zone.HDZONE)),
)


def decode_line(line: str, rules: tuple[Rule, ...] = RULES) -> Event:
    """Decode one line. Never raises; unmatched lines become `UnknownLine`."""
    for rule in rules:
        m = rule.match(line)
        if m is None:
            continue
        try:
            event = rule.build(line, m)
        except ValueError:
            _LOGGER.warning("Rule %s matched but failed to decode %r", rule.name, line)
            return UnknownLine(line)
        _LOGGER.debug("%r interpreted as %s: %s", line, rule.name, event)
        return event

    _LOGGER.debug("Received %r - don't know what this means", line)
    return UnknownLine(line)
