"""In-process meters, value trackers, gauges and traces grouped into scopes and registries."""

__version__ = "3.0.0"