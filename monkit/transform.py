"""Callback transformers applied to stat sources."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Callable

from monkit.stats import SeriesKey, StatSource, StatSourceFunc, StatsCallback


class CallbackTransformer(ABC):
    """Takes a stats callback and returns a transformed one."""

    @abstractmethod
    def transform(self, cb: StatsCallback) -> StatsCallback:
        """Return a callback wrapping ``cb``."""


class CallbackTransformerFunc(CallbackTransformer):
    """A transformer backed by a single function."""

    def __init__(self, fn: Callable[[StatsCallback], StatsCallback]) -> None:
        self._fn = fn

    def transform(self, cb: StatsCallback) -> StatsCallback:
        return self._fn(cb)


def transform_stat_source(
    source: StatSource, *transformers: CallbackTransformer
) -> StatSource:
    """Wrap ``source`` so its callbacks pass through every transformer."""

    def run(cb: StatsCallback) -> None:
        for transformer in transformers:
            cb = transformer.transform(cb)
        source.stats(cb)

    return StatSourceFunc(run)


class DeltaTransformer(CallbackTransformer):
    """Emits a ``delta`` field after each ``total`` field seen before.

    It remembers the previous totals, so use a separate instance per output.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_totals: dict[str, float] = {}

    def transform(self, cb: StatsCallback) -> StatsCallback:
        def wrapped(key: SeriesKey, field: str, val: float) -> None:
            if field != "total":
                cb(key, field, val)
                return
            index = key.with_field(field)
            with self._lock:
                last = self._last_totals.get(index)
                self._last_totals[index] = val
            cb(key, field, val)
            if last is not None:
                cb(key, "delta", val - last)

        return wrapped