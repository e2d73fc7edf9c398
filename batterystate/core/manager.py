"""Battery service - owns the resolved configuration and the snapshot."""

import logging
from typing import Any, Optional

from batterystate.core.binding import BatteryConstants, BatteryManagerConstants, SnapshotWriter
from batterystate.core.provider import PowerSupplyProvider
from batterystate.core.types import BatterySnapshot, PowerSupplyConfig

log = logging.getLogger(__name__)


class BatteryService:
    """Runs discovery once, then refreshes the snapshot on demand.

    Not thread-safe: callers must not run ``start()`` or ``update()``
    concurrently with each other.

    Args:
        provider: Where battery and charger state comes from.
        snapshot: Object to write into; a new BatterySnapshot by default.
            Anything exposing the same attributes is accepted.
        constants: Source of the status/health integer values.
    """

    def __init__(self, provider: PowerSupplyProvider, snapshot: Any = None,
                 constants: Any = BatteryManagerConstants):
        self._provider = provider
        self._snapshot = snapshot if snapshot is not None else BatterySnapshot()
        self._constants_source = constants
        self._writer: Optional[SnapshotWriter] = None
        self._config: Optional[PowerSupplyConfig] = None

    @property
    def snapshot(self) -> Any:
        return self._snapshot

    @property
    def config(self) -> Optional[PowerSupplyConfig]:
        """Resolved configuration, or None before ``start()``."""
        return self._config

    @property
    def constants(self) -> Optional[BatteryConstants]:
        return self._writer.constants if self._writer else None

    @property
    def started(self) -> bool:
        return self._config is not None

    def start(self) -> PowerSupplyConfig:
        """Bind to the snapshot and discover the power-supply tree.

        Subsequent calls return the configuration from the first call.

        Raises:
            BindingError: the snapshot or constants provider is incomplete.
        """
        if self._config is not None:
            return self._config

        constants = BatteryConstants.from_source(self._constants_source)
        self._writer = SnapshotWriter(self._snapshot, constants)
        self._config = self._provider.discover()
        log.info(
            "%s: %d charger(s), battery level from %s",
            self._provider.name, len(self._config.chargers),
            self._config.paths.level_source or "nowhere",
        )
        return self._config

    def update(self) -> Any:
        """Re-read every resolved attribute into the snapshot and return it."""
        if self._config is None:
            self.start()
        self._provider.refresh(self._config, self._writer)
        return self._snapshot

    def close(self) -> None:
        self._provider.close()
