import logging
from pathlib import Path

from conftest import write_supply

from batterystate.core.types import PowerSupplyConfig
from batterystate.providers.sysfs import SysfsProvider


def test_discover_laptop(laptop: Path):
    config = SysfsProvider(laptop).discover()

    bat = laptop / "BAT0"
    assert config.root == laptop
    assert config.chargers == ("AC", "usb")
    assert config.voltage_divisor == 1000
    assert config.paths.status == bat / "status"
    assert config.paths.health == bat / "health"
    assert config.paths.present == bat / "present"
    assert config.paths.capacity == bat / "capacity"
    assert config.paths.voltage == bat / "voltage_now"
    assert config.paths.temperature == bat / "temp"
    assert config.paths.technology == bat / "technology"
    assert config.paths.level_source == "capacity"
    assert config.paths.missing() == []


def test_capacity_wins_over_charge_pair(supply_root: Path):
    write_supply(supply_root, "BAT0", type="Battery", capacity="37",
                 charge_now="50", charge_full="200")
    paths = SysfsProvider(supply_root).discover().paths
    assert paths.capacity is not None
    assert paths.charge_now is None
    assert paths.charge_full is None


def test_charge_pair_preferred_over_energy_pair(supply_root: Path):
    write_supply(supply_root, "BAT0", type="Battery", charge_now="50", charge_full="200",
                 energy_now="1", energy_full="2")
    paths = SysfsProvider(supply_root).discover().paths
    assert paths.level_source == "charge"
    assert paths.energy_now is None


def test_incomplete_charge_pair_falls_back_to_energy(supply_root: Path):
    write_supply(supply_root, "BAT0", type="Battery", charge_now="50",
                 energy_now="30000000", energy_full="60000000")
    paths = SysfsProvider(supply_root).discover().paths
    assert paths.level_source == "energy"
    assert paths.charge_now is None
    assert paths.level_pair == (supply_root / "BAT0" / "energy_now",
                                supply_root / "BAT0" / "energy_full")


def test_batt_vol_and_batt_temp_fallbacks(supply_root: Path):
    write_supply(supply_root, "battery", type="Battery", batt_vol="4200", batt_temp="310")
    config = SysfsProvider(supply_root).discover()
    assert config.paths.voltage == supply_root / "battery" / "batt_vol"
    assert config.paths.temperature == supply_root / "battery" / "batt_temp"
    assert config.voltage_divisor == 1


def test_voltage_now_preferred_over_batt_vol(supply_root: Path):
    write_supply(supply_root, "battery", type="Battery", voltage_now="4200000", batt_vol="4200")
    config = SysfsProvider(supply_root).discover()
    assert config.paths.voltage == supply_root / "battery" / "voltage_now"
    assert config.voltage_divisor == 1000


def test_charger_without_online_is_dropped(supply_root: Path):
    write_supply(supply_root, "AC", type="Mains")
    write_supply(supply_root, "wireless", type="Wireless", online="0")
    (supply_root / "AC" / "online").mkdir()
    config = SysfsProvider(supply_root).discover()
    assert config.chargers == ("wireless",)


def test_usb_charging_port_variants_are_chargers(supply_root: Path):
    for name, kind in (("dcp", "USB_DCP"), ("cdp", "USB_CDP"), ("aca", "USB_ACA")):
        write_supply(supply_root, name, type=kind, online="1")
    config = SysfsProvider(supply_root).discover()
    assert config.chargers == ("aca", "cdp", "dcp")


def test_unknown_type_is_skipped_with_warning(supply_root: Path, caplog):
    caplog.set_level(logging.WARNING)
    write_supply(supply_root, "ups", type="UPS", online="1")
    config = SysfsProvider(supply_root).discover()
    assert config.chargers == ()
    assert "ups/type is unknown" in caplog.text


def test_missing_quantities_are_reported(supply_root: Path, caplog):
    caplog.set_level(logging.WARNING)
    write_supply(supply_root, "AC", type="Mains", online="1")
    write_supply(supply_root, "BAT0", type="Battery", status="Full", charge_now="5")
    SysfsProvider(supply_root).discover()

    messages = [r.getMessage() for r in caplog.records]
    assert "No charger supplies found" not in messages
    for quantity in ("health", "present", "level", "voltage", "temperature", "technology"):
        assert f"Battery {quantity} path not found" in messages
    assert "Battery status path not found" not in messages


def test_unreadable_root_gives_empty_config(tmp_path: Path, caplog):
    caplog.set_level(logging.WARNING)
    root = tmp_path / "nope"
    config = SysfsProvider(root).discover()
    assert config == PowerSupplyConfig.empty(root)
    assert config.paths.level_source is None
    assert "Could not open" in caplog.text
    assert "No charger supplies found" in caplog.text


def test_empty_root(supply_root: Path, caplog):
    caplog.set_level(logging.WARNING)
    config = SysfsProvider(supply_root).discover()
    assert config.chargers == ()
    assert "No charger supplies found" in caplog.text


def test_later_battery_replaces_level_source(supply_root: Path):
    write_supply(supply_root, "BAT0", type="Battery", capacity="40", voltage_now="1")
    write_supply(supply_root, "BAT1", type="Battery", charge_now="1", charge_full="2",
                 status="Charging")
    paths = SysfsProvider(supply_root).discover().paths
    assert paths.level_source == "charge"
    assert paths.capacity is None
    assert paths.status == supply_root / "BAT1" / "status"
    assert paths.voltage == supply_root / "BAT0" / "voltage_now"
