"""Core abstractions for power-supply state aggregation."""

from batterystate.core.types import (
    PowerSupplyType,
    BatteryStatus,
    BatteryHealth,
    ResolvedPaths,
    PowerSupplyConfig,
    BatterySnapshot,
)
from batterystate.core.binding import (
    BindingError,
    BatteryConstants,
    BatteryManagerConstants,
    SnapshotWriter,
)
from batterystate.core.provider import PowerSupplyProvider
from batterystate.core.manager import BatteryService

__all__ = [
    "PowerSupplyType",
    "BatteryStatus",
    "BatteryHealth",
    "ResolvedPaths",
    "PowerSupplyConfig",
    "BatterySnapshot",
    "BindingError",
    "BatteryConstants",
    "BatteryManagerConstants",
    "SnapshotWriter",
    "PowerSupplyProvider",
    "BatteryService",
]
