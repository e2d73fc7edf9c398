"""Decoders from raw attribute text to canonical enums.

Status and health dispatch on the first character and only fall back to a
full-string comparison where two tokens share a leading letter. Every input
maps to a value; nothing here raises.
"""

import logging
from typing import Dict, Optional

from batterystate.core.types import BatteryHealth, BatteryStatus, PowerSupplyType

log = logging.getLogger(__name__)

_STATUS_BY_LETTER: Dict[str, BatteryStatus] = {
    "C": BatteryStatus.CHARGING,        # Charging
    "D": BatteryStatus.DISCHARGING,     # Discharging
    "F": BatteryStatus.FULL,            # Full
    "N": BatteryStatus.NOT_CHARGING,    # Not charging
    "U": BatteryStatus.UNKNOWN,         # Unknown
}

_HEALTH_BY_LETTER: Dict[str, BatteryHealth] = {
    "C": BatteryHealth.COLD,
    "D": BatteryHealth.DEAD,
    "G": BatteryHealth.GOOD,
}

# Letters shared by several tokens; resolved by exact match.
_HEALTH_BY_NAME: Dict[str, Dict[str, BatteryHealth]] = {
    "O": {
        "Overheat": BatteryHealth.OVERHEAT,
        "Over voltage": BatteryHealth.OVER_VOLTAGE,
    },
    "U": {
        "Unspecified failure": BatteryHealth.UNSPECIFIED_FAILURE,
        "Unknown": BatteryHealth.UNKNOWN,
    },
}

_SUPPLY_TYPES: Dict[str, PowerSupplyType] = {
    "Battery": PowerSupplyType.BATTERY,
    "Mains": PowerSupplyType.AC,
    "USB_DCP": PowerSupplyType.AC,
    "USB_CDP": PowerSupplyType.AC,
    "USB_ACA": PowerSupplyType.AC,
    "USB": PowerSupplyType.USB,
    "Wireless": PowerSupplyType.WIRELESS,
}


def decode_status(text: str) -> BatteryStatus:
    status = _STATUS_BY_LETTER.get(text[:1])
    if status is None:
        log.warning("Unknown battery status '%s'", text)
        return BatteryStatus.UNKNOWN
    return status


def decode_health(text: str) -> BatteryHealth:
    letter = text[:1]
    health = _HEALTH_BY_LETTER.get(letter)
    if health is not None:
        return health

    by_name = _HEALTH_BY_NAME.get(letter)
    if by_name is not None and text in by_name:
        return by_name[text]

    log.warning("Unknown battery health '%s'", text)
    return BatteryHealth.UNKNOWN


def decode_supply_type(text: Optional[str]) -> PowerSupplyType:
    """Map a ``type`` attribute to a supply type; anything unlisted is UNKNOWN."""
    if not text:
        return PowerSupplyType.UNKNOWN
    return _SUPPLY_TYPES.get(text, PowerSupplyType.UNKNOWN)
