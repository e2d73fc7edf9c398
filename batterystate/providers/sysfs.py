"""sysfs power-supply provider: reads /sys/class/power_supply/.

Discovery classifies every device directory by its ``type`` attribute and
records, for the battery, the first readable file among the known vendor
spellings of each quantity. Refresh only re-reads those files.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from batterystate.core.attributes import (
    TEXT_SIZE, is_readable, parse_int, read_attribute, read_bool, read_int,
)
from batterystate.core.binding import SnapshotWriter
from batterystate.core.decoders import decode_health, decode_status, decode_supply_type
from batterystate.core.provider import PowerSupplyProvider
from batterystate.core.types import (
    CHARGER_TYPES, BatteryStatus, PowerSupplyConfig, PowerSupplyType, ResolvedPaths,
)

log = logging.getLogger(__name__)

POWER_SUPPLY_DIR = Path("/sys/class/power_supply")

# voltage_now is in microvolts, batt_vol in millivolts
_VOLTAGE_SOURCES = (("voltage_now", 1000), ("batt_vol", 1))
_TEMPERATURE_SOURCES = ("temp", "batt_temp")
_LEVEL_PAIRS = (
    ("charge_now", "charge_full"),
    ("energy_now", "energy_full"),
)
_LEVEL_FIELDS = ("capacity", "charge_now", "charge_full", "energy_now", "energy_full")


def _first_readable(ps_dir: Path, names) -> Optional[Path]:
    for name in names:
        path = ps_dir / name
        if is_readable(path):
            return path
    return None


class SysfsProvider(PowerSupplyProvider):
    """Aggregate battery/charger provider over a power-supply directory tree."""

    def __init__(self, root: Path = POWER_SUPPLY_DIR):
        self._root = Path(root)

    @property
    def name(self) -> str:
        return "sysfs"

    @property
    def root(self) -> Path:
        return self._root

    # --- Discovery ---

    def discover(self) -> PowerSupplyConfig:
        try:
            names = sorted(entry.name for entry in self._root.iterdir())
        except OSError as e:
            log.error("Could not open %s: %s", self._root, e)
            config = PowerSupplyConfig.empty(self._root)
            self._report(config)
            return config

        chargers: List[str] = []
        found: Dict[str, Path] = {}
        divisor = 1

        for name in names:
            ps_dir = self._root / name
            ps_type = decode_supply_type(read_attribute(ps_dir / "type", TEXT_SIZE))

            if ps_type in CHARGER_TYPES:
                if is_readable(ps_dir / "online"):
                    chargers.append(name)
            elif ps_type is PowerSupplyType.BATTERY:
                battery, battery_divisor = self._probe_battery(ps_dir)
                if any(field in battery for field in _LEVEL_FIELDS):
                    for field in _LEVEL_FIELDS:
                        found.pop(field, None)
                if "voltage" in battery:
                    divisor = battery_divisor
                found.update(battery)
            else:
                log.warning("%s/type is unknown, skipping", ps_dir)

        config = PowerSupplyConfig(
            root=self._root,
            paths=ResolvedPaths(**found),
            chargers=tuple(chargers),
            voltage_divisor=divisor,
        )
        self._report(config)
        return config

    def _probe_battery(self, ps_dir: Path) -> Tuple[Dict[str, Path], int]:
        """Resolve each battery quantity independently for one device."""
        found: Dict[str, Path] = {}
        divisor = 1

        for field in ("status", "health", "present", "technology"):
            path = _first_readable(ps_dir, (field,))
            if path is not None:
                found[field] = path

        capacity = _first_readable(ps_dir, ("capacity",))
        if capacity is not None:
            found["capacity"] = capacity
        else:
            for now_name, full_name in _LEVEL_PAIRS:
                now = _first_readable(ps_dir, (now_name,))
                full = _first_readable(ps_dir, (full_name,))
                if now is not None and full is not None:
                    found[now_name] = now
                    found[full_name] = full
                    break

        for file_name, scale in _VOLTAGE_SOURCES:
            path = _first_readable(ps_dir, (file_name,))
            if path is not None:
                found["voltage"] = path
                divisor = scale
                break

        temperature = _first_readable(ps_dir, _TEMPERATURE_SOURCES)
        if temperature is not None:
            found["temperature"] = temperature

        return found, divisor

    @staticmethod
    def _report(config: PowerSupplyConfig) -> None:
        if not config.chargers:
            log.warning("No charger supplies found")
        for quantity in config.paths.missing():
            log.warning("Battery %s path not found", quantity)
        log.debug(
            "Resolved %s: chargers=%s level=%s divisor=%d",
            config.root, list(config.chargers), config.paths.level_source,
            config.voltage_divisor,
        )

    # --- Refresh ---

    def refresh(self, config: PowerSupplyConfig, writer: SnapshotWriter) -> None:
        paths = config.paths

        writer.set_present(read_bool(paths.present))
        self._refresh_level(paths, writer)
        # Truncates toward zero.
        writer.set_voltage(int(read_int(paths.voltage) / config.voltage_divisor))
        writer.set_temperature(read_int(paths.temperature))

        text = read_attribute(paths.status)
        writer.set_status(decode_status(text) if text else BatteryStatus.UNKNOWN)

        # Health and technology keep their previous value on a failed read.
        text = read_attribute(paths.health)
        if text:
            writer.set_health(decode_health(text))

        text = read_attribute(paths.technology)
        if text:
            writer.set_technology(text)

        self._refresh_chargers(config, writer)

    @staticmethod
    def _refresh_level(paths: ResolvedPaths, writer: SnapshotWriter) -> None:
        if paths.present is None:
            # No battery to speak of: mains-powered machine.
            writer.set_level(100)
            return

        if paths.capacity is not None:
            writer.set_level(read_int(paths.capacity))
            return

        pair = paths.level_pair
        if pair is None:
            return

        # A battery node can vanish for a moment; writing 0 would look like
        # an empty battery, so a failed read leaves the level untouched.
        now_text = read_attribute(pair[0])
        full_text = read_attribute(pair[1])
        if not now_text or not full_text:
            return
        now = parse_int(now_text)
        full = parse_int(full_text)
        if full == 0:
            log.warning("Battery full charge reads 0 in '%s'", pair[1])
            return
        level = now * 100 // full
        writer.set_level(level)
        log.debug("Computed level %d from %s/%s", level, now, full)

    @staticmethod
    def _refresh_chargers(config: PowerSupplyConfig, writer: SnapshotWriter) -> None:
        online = {t: False for t in CHARGER_TYPES}

        for name in config.chargers:
            state = read_attribute(config.charger_attribute(name, "online"))
            if not state or state[0] == "0":
                continue
            ps_type = decode_supply_type(
                read_attribute(config.charger_attribute(name, "type"))
            )
            if ps_type in online:
                online[ps_type] = True
            else:
                log.warning("%s: Unknown power supply type", name)

        if not config.chargers:
            # Most likely a desktop with no charger nodes at all.
            online[PowerSupplyType.AC] = True

        writer.set_ac_online(online[PowerSupplyType.AC])
        writer.set_usb_online(online[PowerSupplyType.USB])
        writer.set_wireless_online(online[PowerSupplyType.WIRELESS])
