"""Contracts with the service that owns the snapshot.

Two things are resolved once, at start-up: the integer values the owner
uses for each status/health variant, and the set of fields the snapshot
exposes. Either failing is fatal; everything after that only assigns.
"""

from dataclasses import dataclass
from typing import Any, Dict

from batterystate.core.types import SNAPSHOT_FIELDS, BatteryHealth, BatteryStatus


class BindingError(RuntimeError):
    """The snapshot or the constants provider is missing something required."""


class BatteryManagerConstants:
    """Default constants provider, using the conventional battery manager values."""
    BATTERY_STATUS_UNKNOWN = 1
    BATTERY_STATUS_CHARGING = 2
    BATTERY_STATUS_DISCHARGING = 3
    BATTERY_STATUS_NOT_CHARGING = 4
    BATTERY_STATUS_FULL = 5

    BATTERY_HEALTH_UNKNOWN = 1
    BATTERY_HEALTH_GOOD = 2
    BATTERY_HEALTH_OVERHEAT = 3
    BATTERY_HEALTH_DEAD = 4
    BATTERY_HEALTH_OVER_VOLTAGE = 5
    BATTERY_HEALTH_UNSPECIFIED_FAILURE = 6
    BATTERY_HEALTH_COLD = 7


@dataclass(frozen=True)
class BatteryConstants:
    """Status and health integers, keyed by enum member."""
    status: Dict[BatteryStatus, int]
    health: Dict[BatteryHealth, int]

    @classmethod
    def from_source(cls, source: Any = BatteryManagerConstants) -> "BatteryConstants":
        """Resolve every ``BATTERY_STATUS_*`` / ``BATTERY_HEALTH_*`` attribute.

        Raises:
            BindingError: an attribute is missing or is not an integer.
        """
        status = {s: cls._lookup(source, "BATTERY_STATUS_" + s.name) for s in BatteryStatus}
        health = {h: cls._lookup(source, "BATTERY_HEALTH_" + h.name) for h in BatteryHealth}
        return cls(status=status, health=health)

    @staticmethod
    def _lookup(source: Any, name: str) -> int:
        try:
            value = getattr(source, name)
        except AttributeError:
            raise BindingError(f"Unable to find constant {name}") from None
        if isinstance(value, bool) or not isinstance(value, int):
            raise BindingError(f"Constant {name} is not an integer: {value!r}")
        return value

    def status_name(self, value: int) -> str:
        for status, code in self.status.items():
            if code == value:
                return status.name.lower()
        return "unknown"

    def health_name(self, value: int) -> str:
        for health, code in self.health.items():
            if code == value:
                return health.name.lower()
        return "unknown"


class SnapshotWriter:
    """Assignment-only view of a snapshot object.

    The target may be any object with the ten snapshot attributes; they are
    checked once here so that a refresh can never fail on a missing field.
    """

    def __init__(self, target: Any, constants: BatteryConstants):
        missing = [name for name in SNAPSHOT_FIELDS if not hasattr(target, name)]
        if missing:
            raise BindingError(
                f"Snapshot {type(target).__name__} is missing field(s): {', '.join(missing)}"
            )
        self._target = target
        self._constants = constants

    @property
    def constants(self) -> BatteryConstants:
        return self._constants

    def set_ac_online(self, value: bool) -> None:
        self._target.ac_online = value

    def set_usb_online(self, value: bool) -> None:
        self._target.usb_online = value

    def set_wireless_online(self, value: bool) -> None:
        self._target.wireless_online = value

    def set_present(self, value: bool) -> None:
        self._target.present = value

    def set_status(self, value: BatteryStatus) -> None:
        self._target.status = self._constants.status[value]

    def set_health(self, value: BatteryHealth) -> None:
        self._target.health = self._constants.health[value]

    def set_level(self, value: int) -> None:
        self._target.level = value

    def set_voltage(self, millivolts: int) -> None:
        self._target.voltage_millivolts = millivolts

    def set_temperature(self, tenths_celsius: int) -> None:
        self._target.temperature_tenths_celsius = tenths_celsius

    def set_technology(self, value: str) -> None:
        self._target.technology = value
