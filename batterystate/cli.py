#!/usr/bin/env python3
"""Command-line interface for the batterystate power-supply aggregator."""

import sys
import json
import time
import logging
import argparse
from dataclasses import asdict, is_dataclass
from pathlib import Path

from batterystate import config as cfg
from batterystate.core.binding import BindingError
from batterystate.core.manager import BatteryService
from batterystate.providers.sysfs import SysfsProvider


def _create_service(root: Path) -> BatteryService:
    """Create a BatteryService reading from the given power-supply root."""
    return BatteryService(SysfsProvider(root))


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def _snapshot_dict(service: BatteryService) -> dict:
    snap = service.snapshot
    constants = service.constants
    data = asdict(snap) if is_dataclass(snap) else dict(vars(snap))
    data["status_name"] = constants.status_name(snap.status)
    data["health_name"] = constants.health_name(snap.health)
    return data


def _config_dict(service: BatteryService) -> dict:
    conf = service.config
    paths = {
        name: str(path) if path is not None else None
        for name, path in vars(conf.paths).items()
    }
    return {
        "root": str(conf.root),
        "chargers": list(conf.chargers),
        "level_source": conf.paths.level_source,
        "voltage_divisor": conf.voltage_divisor,
        "paths": paths,
    }


def _print_config(service: BatteryService) -> None:
    conf = _config_dict(service)
    print(f"Power supplies under {conf['root']}:\n")
    chargers = ", ".join(conf["chargers"]) or "none"
    print(f"  Chargers:     {chargers}")
    print(f"  Level source: {conf['level_source'] or 'none'}")
    print(f"  Voltage unit: {'uV' if conf['voltage_divisor'] == 1000 else 'mV'}")
    print()
    for name, path in conf["paths"].items():
        print(f"    {name:<12} {path or '-'}")


def _print_snapshot(data: dict) -> None:
    sources = [name for name, key in (("ac", "ac_online"), ("usb", "usb_online"),
                                      ("wireless", "wireless_online")) if data[key]]
    status = data["status_name"].replace("_", " ")
    print(f"Battery:     {data['level']}% ({status})")
    print(f"Present:     {'yes' if data['present'] else 'no'}")
    print(f"Health:      {data['health_name'].replace('_', ' ')}")
    print(f"Voltage:     {data['voltage_millivolts']} mV")
    print(f"Temperature: {data['temperature_tenths_celsius'] / 10:.1f} C")
    if data["technology"]:
        print(f"Technology:  {data['technology']}")
    print(f"Power:       {', '.join(sources) or 'battery'}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="batterystate - battery and power-supply status",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  %(prog)s              Show battery and charger status
  %(prog)s --json       Output as JSON (for scripts/waybar)
  %(prog)s --list       Show which attribute files were resolved
  %(prog)s --watch      Continuously monitor battery
""",
    )
    parser.add_argument("--list", "-l", action="store_true", help="Show resolved power-supply files")
    parser.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    parser.add_argument("--watch", "-w", action="store_true", help="Continuously monitor battery")
    parser.add_argument(
        "--interval", "-i", type=_positive_int, default=None,
        help="Watch interval in seconds (default: from config, 30)",
    )
    parser.add_argument("--root", "-r", type=Path, default=None, help="Power-supply directory")
    parser.add_argument("--config", "-c", type=Path, default=None, help="Config file path")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    config = cfg.load_config(args.config)

    level = "DEBUG" if args.verbose else str(cfg.get(config, "logging.level", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    root = args.root or cfg.get_power_supply_root(config)
    interval = args.interval
    if interval is None:
        interval = cfg.get(config, "polling.interval_seconds", 30)

    service = _create_service(root)
    try:
        service.start()
    except BindingError as e:
        if args.json:
            print(json.dumps({"error": str(e)}))
        else:
            print(f"Error: {e}")
        return 1

    def print_status():
        service.update()
        data = _snapshot_dict(service)
        if args.json:
            print(json.dumps(data))
        else:
            _print_snapshot(data)

    try:
        if args.list:
            if args.json:
                print(json.dumps(_config_dict(service)))
            else:
                _print_config(service)
        elif args.watch:
            print(f"Monitoring battery (every {interval}s, Ctrl+C to stop)...\n")
            try:
                while True:
                    print_status()
                    print()
                    time.sleep(interval)
            except KeyboardInterrupt:
                print("\nStopped.")
        else:
            print_status()
    finally:
        service.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
