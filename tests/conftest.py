from pathlib import Path

import pytest

from batterystate.core.binding import BatteryConstants, SnapshotWriter
from batterystate.core.types import BatterySnapshot


def write_supply(root: Path, name: str, **attributes: str) -> Path:
    """Create ``root/name`` with one file per keyword (newline-terminated)."""
    ps_dir = root / name
    ps_dir.mkdir(parents=True, exist_ok=True)
    for attribute, value in attributes.items():
        (ps_dir / attribute).write_text(value + "\n")
    return ps_dir


@pytest.fixture
def supply_root(tmp_path: Path) -> Path:
    root = tmp_path / "power_supply"
    root.mkdir()
    return root


@pytest.fixture
def laptop(supply_root: Path) -> Path:
    """A typical laptop: mains adapter, USB port and a capacity-reporting battery."""
    write_supply(supply_root, "AC", type="Mains", online="1")
    write_supply(supply_root, "usb", type="USB", online="0")
    write_supply(
        supply_root, "BAT0",
        type="Battery",
        status="Discharging",
        health="Good",
        present="1",
        capacity="87",
        voltage_now="12100000",
        temp="295",
        technology="Li-ion",
    )
    return supply_root


@pytest.fixture
def constants() -> BatteryConstants:
    return BatteryConstants.from_source()


@pytest.fixture
def snapshot() -> BatterySnapshot:
    return BatterySnapshot()


@pytest.fixture
def writer(snapshot: BatterySnapshot, constants: BatteryConstants) -> SnapshotWriter:
    return SnapshotWriter(snapshot, constants)
