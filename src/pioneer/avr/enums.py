"""Enumerations for the Pioneer receiver protocol."""

import enum


class Zone(str, enum.Enum):
    """Amplifier sections of the receiver."""

    MAIN = "main"
    ZONE2 = "zone2"
    ZONE3 = "zone3"
    HDZONE = "hdZone"


class LinkState(enum.Enum):
    """State of the transport link, independent of device power."""

    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
    DISCONNECTED = "disconnected"


class PowerState(enum.Enum):
    UNKNOWN = "unknown"
    ON = "on"
    OFF = "off"


class SupervisorState(enum.Enum):
    IDLE = "idle"
    WATCHING = "watching"
    PROBING = "probing"


class TerminalKind(str, enum.Enum):
    """Input terminal paths reported by the ``SSC`` inventory replies."""

    AUDIO = "audio"
    HDMI = "hdmi"
    COMPONENT = "component"


class DeviceErrorCode(str, enum.Enum):
    """Error codes the receiver answers with instead of a status line."""

    NOT_AVAILABLE_NOW = "E02"
    INVALID_COMMAND = "E03"
    COMMAND_ERROR = "E04"
    PARAMETER_ERROR = "E06"
    BUSY = "B00"

    @property
    def description(self) -> str:
        return _ERROR_DESCRIPTIONS[self]

    @classmethod
    def from_code(cls, code: str) -> "DeviceErrorCode | None":
        try:
            return cls(code)
        except ValueError:
            return None


_ERROR_DESCRIPTIONS = {
    DeviceErrorCode.NOT_AVAILABLE_NOW: (
        "NOT AVAILABLE NOW - Detected the Command line which could not work now."
    ),
    DeviceErrorCode.INVALID_COMMAND: (
        "INVALID COMMAND - Detected an invalid Command with this model."
    ),
    DeviceErrorCode.COMMAND_ERROR: "COMMAND ERROR - Detected inappropriate Command line.",
    DeviceErrorCode.PARAMETER_ERROR: "PARAMETER ERROR - Detected inappropriate Parameter.",
    DeviceErrorCode.BUSY: "BUSY - Now AV Receiver is Busy. Please wait few seconds.",
}
