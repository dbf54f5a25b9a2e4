"""A multiset of spans where every add must be matched by a remove."""

from __future__ import annotations

from collections import Counter
from typing import Generic, Hashable, Iterator, TypeVar

T = TypeVar("T", bound=Hashable)


class SpanBag(Generic[T]):
    """Bag of span references. Not thread safe."""

    def __init__(self) -> None:
        self._counts: Counter = Counter()

    def add(self, span: T) -> None:
        """Add one reference to ``span``."""
        self._counts[span] += 1

    def remove(self, span: T) -> None:
        """Drop one reference to ``span``; unknown spans are ignored."""
        count = self._counts.get(span, 0)
        if count <= 1:
            self._counts.pop(span, None)
        else:
            self._counts[span] = count - 1

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._counts))

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, span: object) -> bool:
        return span in self._counts