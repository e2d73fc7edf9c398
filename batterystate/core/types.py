"""Core data types for the power-supply aggregator."""

from dataclasses import dataclass, field, fields
from enum import Enum, auto
from pathlib import Path
from typing import List, Optional, Tuple


class PowerSupplyType(Enum):
    """Kind of power-supply device, from its ``type`` attribute."""
    UNKNOWN = auto()
    AC = auto()
    USB = auto()
    WIRELESS = auto()
    BATTERY = auto()


class BatteryStatus(Enum):
    """Charge status of the aggregate battery."""
    UNKNOWN = auto()
    CHARGING = auto()
    DISCHARGING = auto()
    NOT_CHARGING = auto()
    FULL = auto()


class BatteryHealth(Enum):
    """Health reported by the battery driver."""
    UNKNOWN = auto()
    GOOD = auto()
    OVERHEAT = auto()
    DEAD = auto()
    OVER_VOLTAGE = auto()
    UNSPECIFIED_FAILURE = auto()
    COLD = auto()


CHARGER_TYPES = (PowerSupplyType.AC, PowerSupplyType.USB, PowerSupplyType.WIRELESS)


@dataclass(frozen=True)
class ResolvedPaths:
    """Attribute files found for the battery, one per logical quantity.

    ``None`` means the quantity has no backing file. At most one level
    strategy is populated: ``capacity`` alone, the ``charge_*`` pair, or
    the ``energy_*`` pair.
    """
    status: Optional[Path] = None
    health: Optional[Path] = None
    present: Optional[Path] = None
    capacity: Optional[Path] = None
    charge_now: Optional[Path] = None
    charge_full: Optional[Path] = None
    energy_now: Optional[Path] = None
    energy_full: Optional[Path] = None
    voltage: Optional[Path] = None
    temperature: Optional[Path] = None
    technology: Optional[Path] = None

    @property
    def level_source(self) -> Optional[str]:
        """Which level strategy was resolved, if any."""
        if self.capacity is not None:
            return "capacity"
        if self.charge_now is not None and self.charge_full is not None:
            return "charge"
        if self.energy_now is not None and self.energy_full is not None:
            return "energy"
        return None

    @property
    def level_pair(self) -> Optional[Tuple[Path, Path]]:
        """(now, full) paths when level is computed from a ratio."""
        source = self.level_source
        if source == "charge":
            return self.charge_now, self.charge_full
        if source == "energy":
            return self.energy_now, self.energy_full
        return None

    def missing(self) -> List[str]:
        """Names of battery quantities that have no backing file."""
        names = ["status", "health", "present"]
        result = [n for n in names if getattr(self, n) is None]
        if self.level_source is None:
            result.append("level")
        result.extend(n for n in ("voltage", "temperature", "technology")
                      if getattr(self, n) is None)
        return result


@dataclass(frozen=True)
class PowerSupplyConfig:
    """Everything discovery resolved; fixed for the life of the process."""
    root: Path
    paths: ResolvedPaths = field(default_factory=ResolvedPaths)
    chargers: Tuple[str, ...] = ()
    voltage_divisor: int = 1

    @classmethod
    def empty(cls, root: Path) -> "PowerSupplyConfig":
        """Configuration used when the power-supply root cannot be read."""
        return cls(root=Path(root))

    def charger_attribute(self, name: str, attribute: str) -> Path:
        return self.root / name / attribute


@dataclass
class BatterySnapshot:
    """Normalized battery and charger state.

    Owned by the caller and overwritten field by field on every refresh.
    ``status`` and ``health`` hold the integers supplied by the constants
    provider, not enum members.
    """
    ac_online: bool = False
    usb_online: bool = False
    wireless_online: bool = False
    status: int = 0
    health: int = 0
    present: bool = False
    level: int = 0
    voltage_millivolts: int = 0
    temperature_tenths_celsius: int = 0
    technology: str = ""


SNAPSHOT_FIELDS = tuple(f.name for f in fields(BatterySnapshot))
