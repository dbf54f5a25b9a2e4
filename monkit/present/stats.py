"""Text and JSON output of every statistic a registry knows."""

from __future__ import annotations

import math
from typing import TextIO

from monkit.present.listing import ListWriter
from monkit.registry import Registry
from monkit.stats import SeriesKey


def _format_float(val: float) -> str:
    if math.isnan(val):
        return "NaN"
    if math.isinf(val):
        return "+Inf" if val > 0 else "-Inf"
    return f"{val:f}"


def stats_text(registry: Registry, w: TextIO) -> None:
    """Write one ``series field=value`` line per statistic to ``w``."""

    def write(key: SeriesKey, field: str, val: float) -> None:
        w.write(f"{key.with_field(field)}={_format_float(val)}\n")

    registry.stats(write)


def stats_old(registry: Registry, w: TextIO) -> None:
    """Deprecated alias of :func:`stats_text`."""
    stats_text(registry, w)


def stats_json(registry: Registry, w: TextIO) -> None:
    """Write every statistic to ``w`` as a JSON list of
    ``[measurement, tags, field, value]`` entries."""
    lw = ListWriter(w)

    def write(key: SeriesKey, field: str, val: float) -> None:
        tags = dict(sorted(key.tags.all().items())) if len(key.tags) else None
        lw.elem([key.measurement, tags, field, val])

    registry.stats(write)
    lw.done()