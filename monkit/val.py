"""Stat sources that keep track of observed boolean and structured values."""

from __future__ import annotations

import threading
from typing import Any

from monkit.stats import SeriesKey, StatSource, StatsCallback
from monkit.structsource import stat_source_from_struct


class BoolVal(StatSource):
    """Counts trues and falses, remembering the most recent observation.

    Reports the disposition (trues minus falses), the false and true counts,
    and the most recent value as 1 or 0.
    """

    def __init__(self, key: SeriesKey) -> None:
        self._key = key
        self._lock = threading.Lock()
        self._trues = 0
        self._falses = 0
        self._recent = False

    @property
    def key(self) -> SeriesKey:
        return self._key

    def observe(self, val: bool) -> None:
        """Record one boolean observation."""
        with self._lock:
            if val:
                self._trues += 1
            else:
                self._falses += 1
            self._recent = bool(val)

    def stats(self, cb: StatsCallback) -> None:
        with self._lock:
            trues, falses, recent = self._trues, self._falses, self._recent
        cb(self._key, "disposition", float(trues - falses))
        cb(self._key, "false", float(falses))
        cb(self._key, "recent", 1.0 if recent else 0.0)
        cb(self._key, "true", float(trues))


class StructVal(StatSource):
    """Reports the numeric fields of the most recently observed dataclass."""

    def __init__(self, key: SeriesKey) -> None:
        self._key = key
        self._lock = threading.Lock()
        self._recent: Any = None

    @property
    def key(self) -> SeriesKey:
        return self._key

    def observe(self, val: Any) -> None:
        """Keep a reference to ``val`` for reporting on the next stats call."""
        with self._lock:
            self._recent = val

    def stats(self, cb: StatsCallback) -> None:
        with self._lock:
            recent = self._recent
        if recent is not None:
            stat_source_from_struct(self._key, recent).stats(cb)