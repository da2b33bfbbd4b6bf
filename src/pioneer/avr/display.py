"""Human-friendly state display using rich tables.

Requires the optional ``cli`` dependency group: ``pip install pioneer-avr[cli]``
Falls back to ``repr()`` if rich is not installed.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import State
    from .zones import ZoneState

NONE = "—"  # shown for missing values


def _fmt(value: object) -> str:
    """Format a single value for display."""
    if value is None or value == "":
        return NONE
    if isinstance(value, bool):
        return "On" if value else "Off"
    if isinstance(value, Enum):
        return str(value.value).replace("_", " ").title()
    return str(value)


def _section(
    table,
    title: str,
    rows: list[tuple[str, object]],
) -> None:
    """Add a titled section to *table*, skipping it if all values are missing."""
    if all(v is None or v == "" for _, v in rows):
        return
    table.add_row(f"[bold cyan]{title}[/bold cyan]", "", end_section=True)
    for label, value in rows:
        table.add_row(f"  {label}", _fmt(value))


def _db(value: float | None) -> str | None:
    return None if value is None else f"{value} dB"


def print_state(state: State, zones: list[ZoneState] | None = None) -> None:
    """Print *state* as a grouped rich table.

    Falls back to ``print(repr(state))`` when rich is not installed.
    """
    try:
        from rich.console import Console
        from rich.table import Table
    except ImportError:
        print(repr(state))
        return

    console = Console()
    header = state.model or "Pioneer receiver"
    if state.software_version:
        header = f"{header} {state.software_version}"

    table = Table(
        title=f"[bold]{header}[/bold]",
        show_header=False,
        padding=(0, 2),
        expand=False,
    )
    table.add_column("Property", style="white", min_width=24)
    table.add_column("Value", style="bright_white")

    get = state.get

    # --- General -----------------------------------------------------------
    _section(table, "General", [
        ("Power", state.power_state),
        ("Input", get("input")),
        ("Volume", f"{get('volume')} %" if get("volume") is not None else None),
        ("Volume (dB)", _db(get("volumeStraight"))),
        ("Mute", get("mute")),
        ("Display", get("display")),
    ])

    # --- Audio -------------------------------------------------------------
    _section(table, "Audio", [
        ("Listening Mode", get("listeningMode")),
        ("Playing", get("listeningModePlaying")),
        ("Speaker System", get("speakerSystem")),
        ("Speakers", get("speakers")),
        ("Signal Select", get("signalSelect")),
        ("Tone", get("tone")),
        ("Bass", _db(get("bass"))),
        ("Treble", _db(get("treble"))),
    ])

    # --- Tuner -------------------------------------------------------------
    _section(table, "Tuner", [
        ("Frequency", get("tunerFrequency")),
        ("Preset", get("channelStraight")),
        ("Station", get("channelName")),
    ])

    # --- Now Playing -------------------------------------------------------
    _section(table, "Now Playing", [
        ("Title", get("currentTrack")),
        ("Artist", get("currentArtist")),
        ("Album", get("currentAlbum")),
        ("Time", get("time")),
    ])

    # --- Network -----------------------------------------------------------
    network = state.network_settings
    _section(table, "Network", [
        ("IP Address", network.ip_address if network else None),
        ("DHCP", network.dhcp if network else None),
        ("MAC Address", state.mac_address),
        ("Network Standby", state.network_standby),
    ])

    # --- Zones -------------------------------------------------------------
    for zone in zones or []:
        readings = zone.readings
        _section(table, f"Zone {zone.zone.value}", [
            ("Power", readings.get("power")),
            ("Input", readings.get("input")),
            ("Volume (dB)", _db(readings.get("volumeStraight"))),
            ("Mute", readings.get("mute")),
        ])

    # --- Inputs ------------------------------------------------------------
    names = [channel for channel in state.inputs if channel.enabled and channel.display_name]
    if names:
        table.add_row(
            "[bold cyan]Inputs[/bold cyan]",
            f"({len(names)} enabled)",
            end_section=True,
        )
        for channel in names:
            table.add_row(f"  {channel.code}", channel.display_name)

    console.print()
    console.print(table)
    console.print()
