"""Escaping of labels for the dot graph format."""

from __future__ import annotations

from typing import Any


def _escape_byte(byte: int) -> bytes:
    char = chr(byte)
    if byte >= 128 or char == " " or (char.isascii() and char.isalnum()):
        return bytes([byte])
    if char == "\n":
        return b"\\l"
    return f"&#{byte};".encode("ascii")


def escape_dot_label(fmt: str, *args: Any) -> str:
    """Format with %-style arguments and escape the result as a dot label.

    Letters, digits, spaces and non-ASCII text pass through, newlines become
    left-justified line breaks and everything else a numeric entity.
    """
    text = fmt % args if args else fmt
    escaped = b"".join(_escape_byte(byte) for byte in text.encode("utf-8"))
    return escaped.decode("utf-8")