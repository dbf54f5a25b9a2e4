"""Registries: the top-level state of a monitoring system."""

from __future__ import annotations

import itertools
import threading
from typing import Callable, Iterable, Optional

from monkit.scope import Scope
from monkit.stats import StatSource, StatsCallback
from monkit.trace import Trace
from monkit.transform import CallbackTransformer

TraceWatcher = Callable[[Trace], None]


class _RegistryState:
    """State shared by every registry handle created from one registry."""

    def __init__(self) -> None:
        self.watcher_lock = threading.Lock()
        self.watcher_ids = itertools.count()
        self.trace_watchers: dict[int, TraceWatcher] = {}
        self.active_watchers: tuple[TraceWatcher, ...] = ()
        self.scope_lock = threading.Lock()
        self.scopes: dict[str, Scope] = {}


class Registry(StatSource):
    """Holds every scope and trace watcher of a monitoring system.

    Handles made by :meth:`with_transformers` share the same scopes and
    watchers but apply extra callback transformers in :meth:`stats`.
    """

    def __init__(
        self,
        *,
        _state: Optional[_RegistryState] = None,
        _transformers: Iterable[CallbackTransformer] = (),
    ) -> None:
        self._state = _state if _state is not None else _RegistryState()
        self._transformers = tuple(_transformers)

    @property
    def transformers(self) -> tuple[CallbackTransformer, ...]:
        return self._transformers

    def with_transformers(self, *transformers: CallbackTransformer) -> "Registry":
        """Return a handle on the same registry with more transformers applied."""
        return Registry(
            _state=self._state,
            _transformers=self._transformers + tuple(transformers),
        )

    def scope_named(self, name: str) -> Scope:
        """Retrieve or create the scope with this name."""
        state = self._state
        with state.scope_lock:
            scope = state.scopes.get(name)
            if scope is None:
                scope = Scope(self, name)
                state.scopes[name] = scope
            return scope

    def observe_trace(self, trace: Trace) -> None:
        """Hand a newly started trace to every registered watcher."""
        for watcher in self._state.active_watchers:
            watcher(trace)

    def _update_watchers(self) -> None:
        self._state.active_watchers = tuple(self._state.trace_watchers.values())

    def observe_traces(self, cb: TraceWatcher) -> Callable[[], None]:
        """Call ``cb`` for every new trace until the returned cancel is called."""
        state = self._state
        with state.watcher_lock:
            watcher_id = next(state.watcher_ids)
            state.trace_watchers[watcher_id] = cb
            self._update_watchers()

        def cancel() -> None:
            with state.watcher_lock:
                state.trace_watchers.pop(watcher_id, None)
                self._update_watchers()

        return cancel

    def scopes(self) -> list[Scope]:
        """All known scopes, sorted by name."""
        with self._state.scope_lock:
            found = list(self._state.scopes.values())
        return sorted(found, key=lambda scope: scope.name)

    def stats(self, cb: StatsCallback) -> None:
        for transformer in self._transformers:
            cb = transformer.transform(cb)
        for scope in self.scopes():
            scope.stats(cb)


DEFAULT = Registry()


def scope_named(name: str) -> Scope:
    """Retrieve or create a scope on the default registry."""
    return DEFAULT.scope_named(name)


def scopes() -> list[Scope]:
    """All scopes of the default registry, sorted by name."""
    return DEFAULT.scopes()


def stats(cb: StatsCallback) -> None:
    """Report every value of the default registry to ``cb``."""
    DEFAULT.stats(cb)