import io
import json
from wsgiref.util import setup_testing_defaults

import pytest

from monkit.present.path import write_index
from monkit.present.stats import stats_text
from monkit.present.webapp import MonitorApp, http_app
from monkit.registry import Registry


@pytest.fixture
def registry():
    reg = Registry()
    reg.scope_named("app").bool_val("flag").observe(False)
    return reg


def call(app, path, query=""):
    environ = {"PATH_INFO": path, "QUERY_STRING": query}
    setup_testing_defaults(environ)
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], body


def test_http_app_wraps_registry(registry):
    app = http_app(registry)
    assert isinstance(app, MonitorApp)
    assert app.registry is registry


def test_index(registry):
    status, headers, body = call(http_app(registry), "/")
    assert status == "200 OK"
    assert headers["Content-Type"] == "text/html"
    expected = io.StringIO()
    write_index(expected)
    assert body.decode("utf-8") == expected.getvalue()


def test_stats_text(registry):
    status, headers, body = call(http_app(registry), "/stats")
    assert status == "200 OK"
    assert headers["Content-Type"] == "text/plain; charset=utf-8"
    expected = io.StringIO()
    stats_text(registry, expected)
    assert body.decode("utf-8") == expected.getvalue()
    assert int(headers["Content-Length"]) == len(body)


def test_stats_json(registry):
    status, headers, body = call(http_app(registry), "/stats/json", "x=1")
    assert status == "200 OK"
    assert headers["Content-Type"] == "application/json; charset=utf-8"
    entries = json.loads(body)
    assert ["flag", {"scope": "app"}, "false", 1.0] in entries


def test_not_found(registry):
    status, headers, body = call(http_app(registry), "/nope")
    assert status == "404 Not Found"
    assert headers["Content-Type"] == "text/plain; charset=utf-8"
    assert headers["X-Content-Type-Options"] == "nosniff"
    assert body == b"Not Found: path not found: /nope\n"