"""Session configuration."""

import logging
from collections.abc import Mapping
from typing import Any

import attr

VOLUME_RAW_MAX = 185
VOLUME_DB_MIN = -80.5
VOLUME_DB_MAX = 12.0
# A percent step is 0.92 dB: 0% is -80 dB, 100% is +12 dB.
PERCENT_TO_DB = 0.92
PERCENT_DB_OFFSET = -80.0

_TRAFFIC_LEVELS = {
    0: logging.CRITICAL,
    1: logging.ERROR,
    2: logging.WARNING,
    3: logging.INFO,
    4: logging.DEBUG,
    5: logging.DEBUG,
}


def percent_to_db(percent: float) -> float:
    return percent * PERCENT_TO_DB + PERCENT_DB_OFFSET


@attr.s(slots=True, frozen=True)
class SessionConfig:
    """Read-only knobs consumed by the session.

    Args:
        volume_limit: Percentage volume ceiling (0-100).
        volume_limit_straight: Volume ceiling in dB (-80.5 to 12).
        check_connection: Run the connection health supervisor.
        log_traffic: Logging level for raw traffic, ``None`` to disable.
    """

    volume_limit: float = attr.ib(default=100)
    volume_limit_straight: float = attr.ib(default=12)
    check_connection: bool = attr.ib(default=True)
    log_traffic: int | None = attr.ib(default=None)

    @volume_limit.validator
    def _check_volume_limit(self, attribute, value):
        if not 0 <= value <= 100:
            raise ValueError(f"volume_limit {value} out of range [0, 100]")

    @volume_limit_straight.validator
    def _check_volume_limit_straight(self, attribute, value):
        if not VOLUME_DB_MIN <= value <= VOLUME_DB_MAX:
            raise ValueError(
                f"volume_limit_straight {value} out of range [{VOLUME_DB_MIN}, {VOLUME_DB_MAX}]"
            )

    @property
    def effective_limit_db(self) -> float:
        """The tighter of both ceilings, expressed in dB."""
        return min(self.volume_limit_straight, percent_to_db(self.volume_limit))

    def exceeds_limit(self, volume_db: float) -> bool:
        """Whether a volume breaks either ceiling.

        Compared in dB against the tighter ceiling, so a report rounded down
        to the percent ceiling still counts.
        """
        return volume_db > self.effective_limit_db

    @staticmethod
    def from_dict(values: Mapping[str, Any]) -> "SessionConfig":
        """Build a config from attribute style keys.

        Recognised keys are ``volumeLimit``, ``volumeLimitStraight``,
        ``checkConnection`` (``enable``/``disable``) and ``logTraffic``
        (verbosity 0-5).
        """
        kwargs: dict[str, Any] = {}
        if "volumeLimit" in values:
            kwargs["volume_limit"] = float(values["volumeLimit"])
        if "volumeLimitStraight" in values:
            kwargs["volume_limit_straight"] = float(values["volumeLimitStraight"])
        if "checkConnection" in values:
            kwargs["check_connection"] = values["checkConnection"] != "disable"
        if values.get("logTraffic") is not None:
            level = int(values["logTraffic"])
            if level not in _TRAFFIC_LEVELS:
                raise ValueError(f"logTraffic {level} out of range [0, 5]")
            kwargs["log_traffic"] = _TRAFFIC_LEVELS[level]
        return SessionConfig(**kwargs)
