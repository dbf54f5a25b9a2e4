"""Traces: the collection of spans started from one root execution."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Hashable, Optional


class SpanObserver(ABC):
    """Receives notice of every span started and finished on a trace."""

    @abstractmethod
    def start(self, span: Any) -> None:
        """Called when a span starts."""

    @abstractmethod
    def finish(
        self, span: Any, err: Optional[BaseException], panicked: bool, finish: float
    ) -> None:
        """Called when a span finishes, with its error, whether it raised, and when."""


class _ObserverRef:
    __slots__ = ("observer",)

    def __init__(self, observer: SpanObserver) -> None:
        self.observer = observer


class Trace:
    """A concurrency-aware analogue of a stack trace; spans are its frames."""

    def __init__(self, id: int) -> None:
        self._id = id
        self._lock = threading.Lock()
        self._vals: dict[Hashable, Any] = {}
        self._span_count = 0
        self._observers: list[_ObserverRef] = []

    @property
    def id(self) -> int:
        return self._id

    def observe_spans(self, observer: SpanObserver) -> Callable[[], None]:
        """Register ``observer`` for all future spans; return a cancel function."""
        ref = _ObserverRef(observer)
        with self._lock:
            self._observers.insert(0, ref)

        def cancel() -> None:
            with self._lock:
                self._observers = [r for r in self._observers if r is not ref]

        return cancel

    def observers(self) -> list[SpanObserver]:
        """Currently registered observers, most recent first."""
        with self._lock:
            return [ref.observer for ref in self._observers]

    def get_all(self) -> dict[Hashable, Any]:
        """Return a copy of every value set on the trace."""
        with self._lock:
            return dict(self._vals)

    def get(self, key: Hashable) -> Any:
        """Return the value for ``key``, or None."""
        with self._lock:
            return self._vals.get(key)

    def set(self, key: Hashable, val: Any) -> None:
        """Associate ``val`` with ``key`` on the trace."""
        with self._lock:
            self._vals[key] = val

    def copy_from(self, other: "Trace") -> None:
        """Replace all values on this trace with those of ``other``."""
        vals = other.get_all()
        with self._lock:
            self._vals = vals

    def increment_spans(self) -> None:
        with self._lock:
            self._span_count += 1

    def decrement_spans(self) -> None:
        with self._lock:
            self._span_count -= 1

    def spans(self) -> int:
        """Number of spans currently associated with the trace."""
        with self._lock:
            return self._span_count