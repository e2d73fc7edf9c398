"""Abstract base class for power-supply providers."""

from abc import ABC, abstractmethod

from batterystate.core.binding import SnapshotWriter
from batterystate.core.types import PowerSupplyConfig


class PowerSupplyProvider(ABC):
    """A source of battery and charger state.

    Implementations:
    - SysfsProvider: /sys/class/power_supply/
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name (e.g., 'sysfs')."""
        ...

    @abstractmethod
    def discover(self) -> PowerSupplyConfig:
        """Scan the device tree once and resolve what can be read.

        Never raises for a missing or unreadable tree; an empty
        configuration is returned instead.
        """
        ...

    @abstractmethod
    def refresh(self, config: PowerSupplyConfig, writer: SnapshotWriter) -> None:
        """Re-read the resolved attributes and write them through ``writer``.

        Only the files named in ``config`` are touched; no rescan happens.
        """
        ...

    def close(self) -> None:
        """Clean up resources."""
        pass
