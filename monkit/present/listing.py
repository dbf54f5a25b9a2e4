"""Streaming JSON list output, one element per line."""

from __future__ import annotations

import json
from typing import Any, TextIO

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _marshal(elem: Any) -> str:
    """Encode ``elem`` as compact JSON with HTML-sensitive characters escaped.

    Those characters can only occur inside JSON strings, so replacing them
    in the encoded text is safe. NaN and infinities raise ValueError.
    """
    data = json.dumps(
        elem, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    )
    for char, escape in _HTML_ESCAPES.items():
        data = data.replace(char, escape)
    return data


class ListWriter:
    """Writes a JSON list to a text stream one element at a time.

    The opening bracket is written on construction; :meth:`done` closes the
    list. Used as a context manager, the list is closed on normal exit.
    """

    def __init__(self, w: TextIO) -> None:
        self._w = w
        self._sep = "\n"
        w.write("[")

    def elem(self, elem: Any) -> None:
        """Encode and write one list element."""
        data = _marshal(elem)
        self._w.write(f"{self._sep} {data}")
        self._sep = ",\n"

    def done(self) -> None:
        """Close the list."""
        self._w.write("]\n")

    def __enter__(self) -> "ListWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc is None:
            self.done()