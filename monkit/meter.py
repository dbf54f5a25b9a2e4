"""Meters that track event counts and rates over a sliding window."""

from __future__ import annotations

import threading
import time
import weakref
from dataclasses import dataclass
from typing import Optional

from monkit import monotime
from monkit.stats import SeriesKey, StatSource, StatsCallback

TICKS_TO_KEEP = 24
TIME_PER_TICK = 10 * 60.0


@dataclass
class _Bucket:
    count: int
    start: float


class _Ticker:
    """Advances every registered meter once per tick in a background thread."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._meters: "weakref.WeakSet[Meter]" = weakref.WeakSet()
        self._thread: Optional[threading.Thread] = None

    def register(self, meter: "Meter") -> None:
        with self._lock:
            if self._thread is None:
                self._thread = threading.Thread(
                    target=self._run, name="monkit-meter-ticker", daemon=True
                )
                self._thread.start()
            self._meters.add(meter)

    def _run(self) -> None:
        while True:
            time.sleep(TIME_PER_TICK)
            with self._lock:
                meters = list(self._meters)
            now = monotime.now()
            for meter in meters:
                meter.tick(now)


_default_ticker = _Ticker()


class Meter(StatSource):
    """Keeps track of events and their rates over time."""

    def __init__(self, key: SeriesKey) -> None:
        self._lock = threading.Lock()
        self._key = key
        self._total = 0
        now = monotime.now()
        self._buckets = [_Bucket(0, now) for _ in range(TICKS_TO_KEEP)]
        _default_ticker.register(self)

    @property
    def key(self) -> SeriesKey:
        return self._key

    def reset(self, new_total: int) -> None:
        """Reset all internal state, starting from ``new_total``."""
        now = monotime.now()
        with self._lock:
            self._total = new_total
            self._buckets = [_Bucket(0, now) for _ in range(TICKS_TO_KEEP)]

    def set_total(self, total: int) -> None:
        """Set the base total count of the meter."""
        with self._lock:
            self._total = total

    def mark(self, amount: int = 1) -> None:
        """Record ``amount`` events in the current time window."""
        with self._lock:
            self._buckets[-1].count += amount

    def tick(self, now: float) -> None:
        """Advance the window, but only if something happened since the last tick."""
        with self._lock:
            if self._buckets[-1].count != 0:
                self._total += self._buckets.pop(0).count
                self._buckets.append(_Bucket(0, now))

    def _stats(self, now: float) -> tuple[float, int]:
        with self._lock:
            start = self._buckets[0].start
            current = sum(bucket.count for bucket in self._buckets)
            total = self._total
        total += current
        duration = now - start
        rate = current / duration if duration > 0 else 0.0
        return rate, total

    def rate(self) -> float:
        """Events per second over the sliding window."""
        return self._stats(monotime.now())[0]

    def total(self) -> float:
        """Total number of events ever recorded."""
        return float(self._stats(monotime.now())[1])

    def stats(self, cb: StatsCallback) -> None:
        rate, total = self._stats(monotime.now())
        cb(self._key, "rate", rate)
        cb(self._key, "total", float(total))


class DiffMeter(StatSource):
    """Reports the difference between the rates and totals of two meters."""

    def __init__(self, key: SeriesKey, meter1: Meter, meter2: Meter) -> None:
        self._key = key
        self._meter1 = meter1
        self._meter2 = meter2

    def stats(self, cb: StatsCallback) -> None:
        now = monotime.now()
        rate1, total1 = self._meter1._stats(now)
        rate2, total2 = self._meter2._stats(now)
        cb(self._key, "rate", rate1 - rate2)
        cb(self._key, "total", float(total1 - total2))