"""Outbound commands for the Pioneer line protocol.

Every builder returns the payload of one protocol line; `encode` turns a
payload into the bytes written to the receiver. Invalid arguments raise
`ValueError`, commands that make no sense for the active input raise
`CommandNotAvailable`.
"""

import re
from collections.abc import Iterable, Iterator

from .config import SessionConfig
from .enums import Zone
from .exceptions import CommandNotAvailable, UnknownCommand
from .framer import TERMINATOR
from .tables import (
    GETS,
    INPUT_ADAPTER_PORT,
    INPUT_IPOD,
    INPUT_MHL,
    INPUT_TUNER,
    LISTENING_MODES,
    NETWORK_PLAYER_INPUTS,
    PLAYER_COMMANDS,
    REMOTE_CONTROL,
    SETS,
    TUNER_COMMANDS,
)

INVENTORY_QUERIES = ("?RGB%02d", "?SSC%02d00", "?SSC%02d01", "?SSC%02d02", "?SSC%02d03", "?ILA%02d")
INVENTORY_CHANNELS = range(60)

_TONE = {"on": "1TO", "bypass": "0TO"}
_MUTE = {"on": "MO", "off": "MF", "toggle": "MZ"}
_SPEAKERS = {"off": "0SPK", "A": "1SPK", "B": "2SPK", "A+B": "3SPK"}
_SIGNAL_SELECT = {
    "auto": "0SDA",
    "analog": "1SDA",
    "digital": "2SDA",
    "hdmi": "3SDA",
    "cycle": "9SDA",
}
_PRESET = re.compile(r"([A-G])([1-9])")
_MHL_UNSUPPORTED = frozenset({"repeat", "shuffle"})


def encode(payload: str) -> bytes:
    """Bytes of one outbound line."""
    return payload.encode("latin-1") + TERMINATOR


def lookup(zone: Zone, name: str) -> str:
    """Payload of a set command that takes no argument."""
    try:
        return SETS[zone][name]
    except KeyError:
        raise UnknownCommand(zone.value, name) from None


def query(zone: Zone, name: str) -> str:
    """Payload of a get command."""
    try:
        return GETS[zone][name]
    except KeyError:
        raise UnknownCommand(zone.value, name) from None


def status_queries(zones: Iterable[Zone] = Zone) -> Iterator[str]:
    """Every get command of the given zones, as used by a status refresh."""
    for zone in zones:
        yield from GETS[zone].values()


def inventory_queries(channels: Iterable[int] = INVENTORY_CHANNELS) -> Iterator[str]:
    """Name, terminal, skip and level queries for each input channel."""
    for channel in channels:
        for template in INVENTORY_QUERIES:
            yield template % channel


def _choice(table: dict[str, str], name: str, value: str) -> str:
    try:
        return table[value]
    except KeyError:
        raise ValueError(
            f"Unknown {name} argument {value!r}, must be one of {', '.join(table)}"
        ) from None


def volume(percent: float, config: SessionConfig | None = None) -> str:
    """Volume in percent, capped at the configured percent limit."""
    config = config or SessionConfig()
    if percent < 0:
        raise ValueError(f"Volume {percent} must not be negative")
    percent = min(percent, config.volume_limit)
    return "%03dVL" % int(percent * 1.85)


def volume_straight(db: float, config: SessionConfig | None = None) -> str:
    """Volume in dB, capped at the configured dB limit."""
    config = config or SessionConfig()
    if db < -80.5:
        raise ValueError(f"Volume {db} dB below -80.5 dB")
    db = min(db, config.volume_limit_straight)
    return "%03dVL" % int((80.5 + db) * 2)


def _tone_level(db: int, suffix: str) -> str:
    if not -6 <= db <= 6:
        raise ValueError(f"Tone level {db} out of range [-6, 6]")
    return "%02d%s" % (int(db * -1) + 6, suffix)


def bass(db: int) -> str:
    return _tone_level(db, "BA")


def treble(db: int) -> str:
    return _tone_level(db, "TR")


def tone(value: str) -> str:
    return _choice(_TONE, "tone", value)


def mute(value: str) -> str:
    return _choice(_MUTE, "mute", value)


def speakers(value: str) -> str:
    return _choice(_SPEAKERS, "speakers", value)


def signal_select(value: str) -> str:
    return _choice(_SIGNAL_SELECT, "signalSelect", value)


def listening_mode(name: str) -> str:
    for code, mode in LISTENING_MODES.items():
        if mode == name:
            return f"{code}SR"
    raise ValueError(f"Unknown listening mode {name!r}")


def input_select(code: str) -> str:
    if not (len(code) == 2 and code.isdigit()):
        raise ValueError(f"Input code {code!r} must be two digits")
    return f"{code}FN"


def remote_control(name: str) -> str:
    try:
        return REMOTE_CONTROL[name]
    except KeyError:
        raise UnknownCommand(Zone.MAIN.value, name) from None


def _require_tuner(name: str, input_code: str | None) -> None:
    if input_code != INPUT_TUNER:
        raise CommandNotAvailable(name, input_code)


def channel(number: int | str, input_code: str | None) -> str:
    """Select a tuner preset by its number within the current class."""
    _require_tuner("channel", input_code)
    m = re.search(r"[1-9]", str(number))
    if m is None:
        raise ValueError(f"Channel {number!r} must be between 1 and 9")
    return f"{m.group(0)}TP"


def channel_straight(preset: str, input_code: str | None) -> str:
    """Select a tuner preset in receiver notation, e.g. ``A1``."""
    _require_tuner("channelStraight", input_code)
    m = _PRESET.search(preset)
    if m is None:
        raise ValueError(f"Preset {preset!r} must be a class A-G followed by 1-9")
    return f"{m.group(1)}0{m.group(2)}PR"


def tuner(name: str, input_code: str | None) -> str:
    if name not in TUNER_COMMANDS:
        raise UnknownCommand(Zone.MAIN.value, name)
    _require_tuner(name, input_code)
    return SETS[Zone.MAIN][name]


def player(name: str, input_code: str | None) -> str:
    """Transport control whose wire command depends on the active input."""
    if name not in PLAYER_COMMANDS:
        raise UnknownCommand(Zone.MAIN.value, name)

    if input_code == INPUT_IPOD:
        key = name + "Ipod"
    elif input_code == INPUT_ADAPTER_PORT:
        key = name + "AdapterPort"
    elif input_code in NETWORK_PLAYER_INPUTS:
        key = name + "Network"
    elif input_code == INPUT_MHL and name not in _MHL_UNSUPPORTED:
        key = name + "Mhl"
    else:
        raise CommandNotAvailable(name, input_code)

    try:
        return SETS[Zone.MAIN][key]
    except KeyError:
        raise CommandNotAvailable(name, input_code) from None
