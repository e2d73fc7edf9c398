"""Configuration management for batterystate."""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

log = logging.getLogger(__name__)

ROOT_ENV = "BATTERYSTATE_POWER_SUPPLY_ROOT"

# Default configuration values
DEFAULTS = {
    "power_supply": {
        "root": "/sys/class/power_supply",
    },

    "polling": {
        "interval_seconds": 30,  # --watch refresh period
    },

    "logging": {
        "level": "WARNING",
    },
}


def get_config_dir() -> Path:
    """Get the configuration directory, creating it if needed."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config:
        config_dir = Path(xdg_config) / "batterystate"
    else:
        config_dir = Path.home() / ".config" / "batterystate"

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    return get_config_dir() / "config.json"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base, returning new dict."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from file, merging with defaults.

    A missing file is created with the defaults; an unreadable one is
    reported and ignored.
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                user_config = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load config from %s: %s", config_path, e)
            return copy.deepcopy(DEFAULTS)
        if not isinstance(user_config, dict):
            log.warning("Ignoring config %s: top level is not an object", config_path)
            return copy.deepcopy(DEFAULTS)
        return _deep_merge(DEFAULTS, user_config)

    save_config(DEFAULTS, config_path)
    return copy.deepcopy(DEFAULTS)


def save_config(config: dict, config_path: Optional[Path] = None) -> bool:
    """Save configuration to file."""
    if config_path is None:
        config_path = get_config_path()

    try:
        with open(config_path, "w") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        log.error("Could not save config to %s: %s", config_path, e)
        return False


def get(config: dict, key: str, default: Any = None) -> Any:
    """Get a config value using dot notation (e.g., 'polling.interval_seconds')."""
    value = config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def get_power_supply_root(config: dict) -> Path:
    """Power-supply root: environment override first, then the config file."""
    env_root = os.environ.get(ROOT_ENV, "")
    if env_root:
        return Path(env_root)
    return Path(get(config, "power_supply.root", DEFAULTS["power_supply"]["root"]))
