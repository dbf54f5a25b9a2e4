"""Series keys, stat sources and collection into a flat mapping."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Callable

from monkit.tags import SeriesTag, TagSet, write_measurement, write_tag

StatsCallback = Callable[["SeriesKey", str, float], None]


@dataclass(frozen=True)
class SeriesKey:
    """An individual time series: a measurement name plus tags."""

    measurement: str
    tags: TagSet = field(default_factory=TagSet)

    def with_tag(self, key: str, value: str) -> "SeriesKey":
        """Return a copy with the tag set."""
        return replace(self, tags=self.tags.set(key, value))

    def with_tags(self, *tags: SeriesTag) -> "SeriesKey":
        """Return a copy with all of the tags set."""
        return replace(self, tags=self.tags.set_tags(*tags))

    def __str__(self) -> str:
        text = write_measurement(self.measurement)
        if len(self.tags):
            text += "," + str(self.tags)
        return text

    def with_field(self, field: str) -> str:
        """Return the series string followed by the escaped field name."""
        return f"{self} {write_tag(field)}"


class StatSource(ABC):
    """Anything that can report named floating point values."""

    @abstractmethod
    def stats(self, cb: StatsCallback) -> None:
        """Call ``cb`` with every (key, field, value) triple."""


class StatSourceFunc(StatSource):
    """A stat source backed by a plain function taking the callback."""

    def __init__(self, fn: Callable[[StatsCallback], None]) -> None:
        self._fn = fn

    def stats(self, cb: StatsCallback) -> None:
        self._fn(cb)


def collect(source: StatSource) -> dict[str, float]:
    """Gather every value reported by ``source`` into a key/value mapping."""
    result: dict[str, float] = {}

    def record(key: SeriesKey, field: str, val: float) -> None:
        result[key.with_field(field)] = val

    source.stats(record)
    return result