"""A WSGI application serving a registry's monitoring data."""

from __future__ import annotations

import io
from http import HTTPStatus
from typing import Callable, Iterable
from urllib.parse import parse_qs

from monkit.present.errs import PresentError, get_status_code
from monkit.present.path import from_request
from monkit.registry import Registry


def _status_line(code: int) -> str:
    try:
        phrase = HTTPStatus(code).phrase
    except ValueError:
        phrase = ""
    return f"{code} {phrase}".rstrip()


class MonitorApp:
    """Serves the paths understood by :func:`from_request` over WSGI."""

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def __call__(
        self, environ: dict, start_response: Callable
    ) -> Iterable[bytes]:
        path = environ.get("PATH_INFO", "")
        query = parse_qs(environ.get("QUERY_STRING", ""))
        try:
            result, content_type = from_request(self.registry, path, query)
        except PresentError as err:
            body = (str(err) + "\n").encode("utf-8")
            start_response(
                _status_line(get_status_code(err, 500)),
                [
                    ("Content-Type", "text/plain; charset=utf-8"),
                    ("X-Content-Type-Options", "nosniff"),
                    ("Content-Length", str(len(body))),
                ],
            )
            return [body]
        out = io.StringIO()
        result(out)
        body = out.getvalue().encode("utf-8")
        start_response(
            _status_line(200),
            [("Content-Type", content_type), ("Content-Length", str(len(body)))],
        )
        return [body]


def http_app(registry: Registry) -> MonitorApp:
    """Build a WSGI application for ``registry``."""
    return MonitorApp(registry)