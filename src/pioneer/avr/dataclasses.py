"""Data classes for the Pioneer protocol."""

from collections.abc import Sequence
from typing import Any

import attr


@attr.s
class InputChannel:
    """Inventory record of one input channel.

    Filled in piecemeal by the ``RGB``, ``SSC`` and ``ILA`` replies, so any
    field but ``code`` may still be unset.
    """

    code: str = attr.ib()
    name: str | None = attr.ib(default=None)
    alias_name: str = attr.ib(default="")
    enabled: bool = attr.ib(default=True)
    input_level_adjust: float | None = attr.ib(default=None)
    audio_terminal: str | None = attr.ib(default=None)
    hdmi_terminal: str | None = attr.ib(default=None)
    component_terminal: str | None = attr.ib(default=None)

    @property
    def display_name(self) -> str | None:
        """Alias name if the user assigned one, the canonical name otherwise."""
        return self.alias_name or self.name

    def to_dict(self) -> dict[str, Any]:
        return attr.asdict(self)


def _dotted(octets: Sequence[str]) -> str:
    return ".".join(str(int(octet)) for octet in octets)


@attr.s(frozen=True)
class NetworkSettings:
    """Network configuration reported by ``SUL``."""

    dhcp: bool = attr.ib()
    ip_address: str = attr.ib()
    netmask: str = attr.ib()
    default_gateway: str = attr.ib()
    dns1: str = attr.ib()
    dns2: str = attr.ib()
    proxy: bool = attr.ib(default=False)
    proxy_name: str | None = attr.ib(default=None)
    proxy_port: int | None = attr.ib(default=None)

    @staticmethod
    def from_fields(fields: Sequence[str]) -> "NetworkSettings":
        """Build from the captured ``SUL`` fields.

        Layout: dhcp flag, 20 three digit octets (address, netmask, gateway,
        dns1, dns2), proxy flag, quoted proxy name, five digit proxy port.
        """
        if len(fields) != 24:
            raise ValueError(f"Expected 24 network fields, got {len(fields)}")
        octets = fields[1:21]
        proxy = fields[21] != "0"
        return NetworkSettings(
            dhcp=fields[0] != "0",
            ip_address=_dotted(octets[0:4]),
            netmask=_dotted(octets[4:8]),
            default_gateway=_dotted(octets[8:12]),
            dns1=_dotted(octets[12:16]),
            dns2=_dotted(octets[16:20]),
            proxy=proxy,
            proxy_name=fields[22].strip('"') if proxy else None,
            proxy_port=int(fields[23]) if proxy else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "dhcp": "on" if self.dhcp else "off",
            "ipAddress": self.ip_address,
            "netmask": self.netmask,
            "defaultGateway": self.default_gateway,
            "dns1": self.dns1,
            "dns2": self.dns2,
            "proxy": "on" if self.proxy else "off",
            "proxyName": self.proxy_name,
            "proxyPort": self.proxy_port,
        }
