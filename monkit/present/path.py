"""Routing of request paths to the presenters that answer them."""

from __future__ import annotations

import io
from typing import Any, Callable, Mapping, Optional, TextIO

from monkit.present.errs import ErrorKind
from monkit.present.stats import stats_json, stats_text
from monkit.registry import Registry

SAMPLED_KEY = "sampled"
SAMPLED_CB_KEY = "sampled-cb"

TEXT_PLAIN = "text/plain; charset=utf-8"
APPLICATION_JSON = "application/json; charset=utf-8"
TEXT_HTML = "text/html"

Result = Callable[[TextIO], None]

_INDEX_HTML = """<!DOCTYPE html>
<html>
	<head>
		<meta charset="utf-8">
		<title>Monkit</title>
	</head>
	<body>
		<dl style="max-width: 80ch;">
			<dt><a href="stats">/stats</a></dt>
			<dt><a href="stats/json">/stats/json</a></dt>
			<dd>Statistics about all observed scopes and values.</dd>
		</dl>
	</body>
</html>"""


def shift(path: str) -> tuple[str, str]:
    """Split off the first component of ``path``.

    Leading slashes are dropped; the remainder keeps its leading slash.
    """
    path = path.lstrip("/")
    head, sep, tail = path.partition("/")
    if not sep:
        return path, ""
    return head, "/" + tail


def write_index(w: TextIO) -> None:
    """Write the HTML index page listing the available endpoints."""
    w.write(_INDEX_HTML)


def _buffered(result: Result) -> Result:
    """Run ``result`` into memory and write it out only if it succeeds."""

    def run(w: TextIO) -> None:
        buf = io.StringIO()
        result(buf)
        w.write(buf.getvalue())

    return run


def _route(registry: Registry, first: str, second: str) -> Optional[tuple[Result, str]]:
    if first == "":
        return write_index, TEXT_HTML
    if first == "stats":
        if second in ("", "text", "old"):
            return (lambda w: stats_text(registry, w)), TEXT_PLAIN
        if second == "json":
            return (lambda w: stats_json(registry, w)), APPLICATION_JSON
    return None


def from_request(
    registry: Registry, path: str, query: Optional[Mapping[str, Any]] = None
) -> tuple[Result, str]:
    """Resolve ``path`` to a result writer and its content type.

    Understood paths:
      * ``/``                      - an HTML index page
      * ``/stats``, ``/stats/text`` - the output of :func:`stats_text`
      * ``/stats/old``             - the same as ``/stats/text``
      * ``/stats/json``            - the output of :func:`stats_json`

    The result writes nothing unless it completes. Unknown paths raise a
    not-found :class:`~monkit.present.errs.PresentError`.
    """
    first, rest = shift(path)
    second, _ = shift(rest)
    routed = _route(registry, first, second)
    if routed is None:
        raise ErrorKind.NOT_FOUND.new("path not found: %s", path)
    result, content_type = routed
    return _buffered(result), content_type