"""Stat sources built from the numeric fields of dataclass instances."""

from __future__ import annotations

import dataclasses
import numbers
from typing import Any

from monkit.stats import SeriesKey, StatSource, StatSourceFunc, StatsCallback


class EmptyStatSource(StatSource):
    """A stat source that reports nothing."""

    def stats(self, cb: StatsCallback) -> None:
        return None


def _is_struct(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_numeric(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def stat_source_from_struct(key: SeriesKey, data: Any) -> StatSource:
    """Report every numeric field of a dataclass instance, recursing into
    nested dataclasses with dotted field names. Anything else reports nothing.
    """
    if not _is_struct(data):
        return EmptyStatSource()

    def run(cb: StatsCallback) -> None:
        for fld in dataclasses.fields(data):
            value = getattr(data, fld.name)
            if _is_struct(value):
                prefix = fld.name + "."
                stat_source_from_struct(key, value).stats(
                    lambda k, f, v, prefix=prefix: cb(k, prefix + f, v)
                )
            elif _is_numeric(value):
                cb(key, fld.name, float(value))

    return StatSourceFunc(run)