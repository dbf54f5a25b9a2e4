"""Scopes: named collections of stat sources."""

from __future__ import annotations

import threading
from typing import Any, Callable, Iterable, Optional, TypeVar

from monkit.meter import DiffMeter, Meter
from monkit.stats import SeriesKey, StatSource, StatsCallback
from monkit.tags import SeriesTag
from monkit.val import BoolVal, StructVal

S = TypeVar("S", bound=StatSource)


class SourceConflictError(ValueError):
    """A name is already used by a stat source of a different kind."""


def source_name(namespace: str, name: str, tags: Iterable[SeriesTag]) -> str:
    """Build the lookup name of a source from its namespace, name and tags."""
    return namespace + name + "".join(f",{tag.key}={tag.val}" for tag in tags)


class _Gauge(StatSource):
    """Reports the value returned by a callback under a fixed name."""

    def __init__(self, name: str, cb: Callable[[], float]) -> None:
        self._key = SeriesKey(name)
        self._cb = cb

    def stats(self, cb: StatsCallback) -> None:
        cb(self._key, "value", float(self._cb()))


class Scope(StatSource):
    """A named collection of stat sources, usually created by a registry."""

    def __init__(self, registry: Any, name: str) -> None:
        self._registry = registry
        self._name = name
        self._lock = threading.Lock()
        self._sources: dict[str, StatSource] = {}
        self._chains: list[StatSource] = []

    @property
    def name(self) -> str:
        """The scope name, often a package name."""
        return self._name

    @property
    def registry(self) -> Any:
        return self._registry

    def __repr__(self) -> str:
        return f"Scope({self._name!r})"

    def _new_source(
        self, name: str, kind: type[S], constructor: Callable[[], S]
    ) -> S:
        with self._lock:
            source = self._sources.get(name)
            if source is None:
                source = constructor()
                self._sources[name] = source
        if not isinstance(source, kind):
            raise SourceConflictError(
                f"{name} already used for another stats source: {source!r}"
            )
        return source

    def meter(self, name: str, *tags: SeriesTag) -> Meter:
        """Retrieve or create the meter with this name and tags."""
        return self._new_source(
            source_name("", name, tags),
            Meter,
            lambda: Meter(SeriesKey(name).with_tags(*tags)),
        )

    def event(self, name: str, *tags: SeriesTag) -> None:
        """Mark one event on the meter with this name and tags."""
        self.meter(name, *tags).mark(1)

    def diff_meter(
        self, name: str, m1: Meter, m2: Meter, *tags: SeriesTag
    ) -> DiffMeter:
        """Retrieve or create a meter reporting the difference of two meters."""
        return self._new_source(
            source_name("", name, tags),
            DiffMeter,
            lambda: DiffMeter(SeriesKey(name).with_tags(*tags), m1, m2),
        )

    def bool_val(self, name: str, *tags: SeriesTag) -> BoolVal:
        """Retrieve or create the boolean value tracker with this name and tags."""
        return self._new_source(
            source_name("", name, tags),
            BoolVal,
            lambda: BoolVal(SeriesKey(name).with_tags(*tags)),
        )

    def bool_valf(self, template: str, *args: Any) -> BoolVal:
        """Like :meth:`bool_val`, with a %-formatted name."""
        return self.bool_val(template % args if args else template)

    def struct_val(self, name: str, *tags: SeriesTag) -> StructVal:
        """Retrieve or create the struct value tracker with this name and tags."""
        return self._new_source(
            source_name("", name, tags),
            StructVal,
            lambda: StructVal(SeriesKey(name).with_tags(*tags)),
        )

    def gauge(self, name: str, cb: Callable[[], float]) -> None:
        """Register ``cb`` as a gauge; an existing gauge of that name is replaced."""
        with self._lock:
            existing: Optional[StatSource] = self._sources.get(name)
            if existing is not None and not isinstance(existing, _Gauge):
                raise SourceConflictError(
                    f"{name} already used for another stats source: {existing!r}"
                )
            self._sources[name] = _Gauge(name, cb)

    def chain(self, source: StatSource) -> None:
        """Include every value of ``source`` in this scope's stats."""
        with self._lock:
            self._chains.append(source)

    def stats(self, cb: StatsCallback) -> None:
        def with_scope(key: SeriesKey, field: str, val: float) -> None:
            cb(key.with_tag("scope", self._name), field, val)

        with self._lock:
            sources = [self._sources[name] for name in sorted(self._sources)]
            chains = list(self._chains)
        for source in sources:
            source.stats(with_scope)
        for source in chains:
            source.stats(with_scope)