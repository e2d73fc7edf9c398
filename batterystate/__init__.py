"""batterystate - battery and power-supply state aggregator."""

__version__ = "0.1.0"
