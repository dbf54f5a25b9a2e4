"""Series tags and immutable tag sets with line-protocol escaping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Optional

_MEASUREMENT_SPECIALS = frozenset(", ")
_TAG_SPECIALS = frozenset(",= ")


@dataclass(frozen=True)
class SeriesTag:
    """A key/value pair; each unique set of pairs names a distinct series."""

    key: str
    val: str


def _escape(text: str, specials: frozenset) -> str:
    if not any(ch in specials for ch in text):
        return text
    return "".join("\\" + ch if ch in specials else ch for ch in text)


def write_measurement(measurement: str) -> str:
    """Escape commas and spaces in a measurement name."""
    return _escape(measurement, _MEASUREMENT_SPECIALS)


def write_tag(tag: str) -> str:
    """Escape commas, equals signs and spaces in a tag key, value or field key."""
    return _escape(tag, _TAG_SPECIALS)


class TagSet:
    """An immutable collection of tag key/value pairs."""

    __slots__ = ("_all", "_str")

    def __init__(self, tags: Optional[Mapping[str, str]] = None) -> None:
        self._all: dict[str, str] = dict(tags) if tags else {}
        self._str: Optional[str] = None

    def get(self, key: str) -> str:
        """Return the value for ``key``, or an empty string if it is absent."""
        return self._all.get(key, "")

    def all(self) -> dict[str, str]:
        """Return a copy of all key/value pairs."""
        return dict(self._all)

    def set(self, key: str, value: str) -> "TagSet":
        """Return a new tag set with ``key`` associated to ``value``."""
        return self.set_all({key: value})

    def set_tags(self, *tags: SeriesTag) -> "TagSet":
        """Return a new tag set with every given tag applied in order."""
        merged = dict(self._all)
        for tag in tags:
            merged[tag.key] = tag.val
        return TagSet(merged)

    def set_all(self, kvs: Optional[Mapping[str, str]]) -> "TagSet":
        """Return a new tag set with every pair of ``kvs`` applied."""
        merged = dict(self._all)
        if kvs:
            merged.update(kvs)
        return TagSet(merged)

    def __len__(self) -> int:
        return len(self._all)

    def __contains__(self, key: object) -> bool:
        return key in self._all

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._all))

    def __str__(self) -> str:
        if self._str is None:
            self._str = ",".join(
                f"{write_tag(key)}={write_tag(value)}"
                for key, value in sorted(self._all.items())
            )
        return self._str

    def __repr__(self) -> str:
        return f"TagSet({self._all!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TagSet):
            return NotImplemented
        return self._all == other._all

    def __hash__(self) -> int:
        return hash(frozenset(self._all.items()))