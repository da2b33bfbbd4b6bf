"""Dummy receiver for development and testing.

Provides a simulated Pioneer receiver that answers the status queries and
common set commands of the line protocol with in-memory state. Useful for
integration testing and development without physical hardware.
"""

from .enums import DeviceErrorCode
from .server import DeviceError, Server
from .tables import DEFAULT_INPUT_NAMES

VOLUME_STEP = 2
VOLUME_MAX = 185


class DummyServer(Server):
    """Simulated Pioneer receiver.

    Implements power, volume, mute, input, tone and input name handling
    for the main zone, power and volume for zone2, and the device
    information queries.

    Args:
        host: Bind address for the TCP server.
        port: Port number (default 8102).
        model: Model name reported by ``?RGD``.
    """

    def __init__(self, host: str, port: int, model: str = "VSX-923") -> None:
        super().__init__(host, port, model)

        self._power = False
        self._volume = 81
        self._mute = False
        self._input = "04"
        self._bass = 6
        self._treble = 6
        self._zone2_power = False
        self._zone2_volume = 40

        self.register_handler("?P", self.get_power)
        self.register_handler("PO", self.power_on)
        self.register_handler("PF", self.power_off)
        self.register_handler("?V", self.get_volume)
        self.register_handler("VU", self.volume_up)
        self.register_handler("VD", self.volume_down)
        self.register_pattern(r"(\d{3})VL", self.set_volume)
        self.register_handler("?M", self.get_mute)
        self.register_handler("MO", lambda: self.set_mute(True))
        self.register_handler("MF", lambda: self.set_mute(False))
        self.register_handler("MZ", lambda: self.set_mute(not self._mute))
        self.register_handler("?F", self.get_input)
        self.register_pattern(r"(\d\d)FN", self.set_input)
        self.register_handler("?BA", self.get_bass)
        self.register_pattern(r"(\d\d)BA", self.set_bass)
        self.register_handler("?TR", self.get_treble)
        self.register_pattern(r"(\d\d)TR", self.set_treble)
        self.register_pattern(r"\?RGB(\d\d)", self.get_input_name)
        self.register_handler("?RGD", self.get_model)
        self.register_handler("?SSI", lambda: 'SSI"1-06-2-0"')
        self.register_handler("?STJ", lambda: "STJ1")
        self.register_handler("?SVB", lambda: "SVB0123456789AB")
        self.register_handler("?AP", self.get_zone2_power)
        self.register_handler("APO", lambda: self.set_zone2_power(True))
        self.register_handler("APF", lambda: self.set_zone2_power(False))
        self.register_handler("?ZV", self.get_zone2_volume)

    def _require_power(self) -> None:
        if not self._power:
            raise DeviceError(DeviceErrorCode.NOT_AVAILABLE_NOW)

    def get_power(self) -> str:
        return "PWR0" if self._power else "PWR1"

    def power_on(self) -> str:
        self._power = True
        return self.get_power()

    def power_off(self) -> str:
        self._power = False
        return self.get_power()

    def get_volume(self) -> str:
        return "VOL%03d" % self._volume

    def set_volume(self, raw: str) -> str:
        self._require_power()
        self._volume = min(int(raw), VOLUME_MAX)
        return self.get_volume()

    def volume_up(self) -> str:
        self._require_power()
        self._volume = min(self._volume + VOLUME_STEP, VOLUME_MAX)
        return self.get_volume()

    def volume_down(self) -> str:
        self._require_power()
        self._volume = max(self._volume - VOLUME_STEP, 0)
        return self.get_volume()

    def get_mute(self) -> str:
        return "MUT0" if self._mute else "MUT1"

    def set_mute(self, mute: bool) -> str:
        self._require_power()
        self._mute = mute
        return self.get_mute()

    def get_input(self) -> str:
        return f"FN{self._input}"

    def set_input(self, code: str) -> str:
        self._require_power()
        if code not in DEFAULT_INPUT_NAMES:
            raise DeviceError(DeviceErrorCode.PARAMETER_ERROR)
        self._input = code
        return self.get_input()

    def get_bass(self) -> str:
        return "BA%02d" % self._bass

    def set_bass(self, raw: str) -> str:
        self._bass = int(raw)
        return self.get_bass()

    def get_treble(self) -> str:
        return "TR%02d" % self._treble

    def set_treble(self, raw: str) -> str:
        self._treble = int(raw)
        return self.get_treble()

    def get_input_name(self, code: str) -> str:
        name = DEFAULT_INPUT_NAMES.get(code)
        if name is None:
            raise DeviceError(DeviceErrorCode.PARAMETER_ERROR)
        return f"RGB{code}0{name.upper()}"

    def get_model(self) -> str:
        return f"RGD<000><{self._model}/CUXESM>"

    def get_zone2_power(self) -> str:
        return "APR0" if self._zone2_power else "APR1"

    def set_zone2_power(self, power: bool) -> str:
        self._zone2_power = power
        return self.get_zone2_power()

    def get_zone2_volume(self) -> str:
        return "ZV%02d" % self._zone2_volume
