"""Power-supply provider implementations."""

from batterystate.providers.sysfs import SysfsProvider

__all__ = ["SysfsProvider"]
