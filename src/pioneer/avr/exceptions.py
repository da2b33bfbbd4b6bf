"""Exception classes for the Pioneer protocol."""

from __future__ import annotations


class PioneerException(Exception):
    pass


class ConnectionFailed(PioneerException):
    pass


class NotConnectedException(PioneerException):
    pass


class UnknownCommand(PioneerException):
    def __init__(self, zone: str, name: str):
        self.zone = zone
        self.name = name
        super().__init__(f"Unknown command {name!r} for zone {zone!r}")


class CommandNotAvailable(PioneerException):
    """Command exists but can not be used with the active input."""

    def __init__(self, name: str, input_code: str | None):
        self.name = name
        self.input_code = input_code
        super().__init__(f"The command {name} for input nr. {input_code} is not possible")
