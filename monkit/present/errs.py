"""Errors raised by the presentation layer, with HTTP status codes."""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from typing import Any


class ErrorKind(Enum):
    """Kinds of request errors."""

    BAD_REQUEST = "Bad Request"
    NOT_FOUND = "Not Found"

    def new(self, fmt: str, *args: Any) -> "PresentError":
        """Build an error of this kind with a %-formatted message."""
        return PresentError(self, fmt % args if args else fmt)


_STATUS_CODES = {
    ErrorKind.BAD_REQUEST: int(HTTPStatus.BAD_REQUEST),
    ErrorKind.NOT_FOUND: int(HTTPStatus.NOT_FOUND),
}


class PresentError(Exception):
    """An error of a known kind, carrying a message."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message


def get_status_code(err: BaseException, default: int) -> int:
    """HTTP status for ``err``, or ``default`` when it is not a known kind."""
    if isinstance(err, PresentError):
        return _STATUS_CODES.get(err.kind, default)
    return default