import io
import json

import pytest

from monkit.present.listing import ListWriter


def test_empty_list():
    out = io.StringIO()
    lw = ListWriter(out)
    lw.done()
    assert out.getvalue() == "[]\n"
    assert json.loads(out.getvalue()) == []


def test_elements_round_trip():
    out = io.StringIO()
    elems = [{"id": 1, "name": "x"}, [1, "two", None], "plain"]
    lw = ListWriter(out)
    for elem in elems:
        lw.elem(elem)
    lw.done()
    assert json.loads(out.getvalue()) == elems


def test_layout_one_element_per_line():
    out = io.StringIO()
    lw = ListWriter(out)
    lw.elem([1])
    lw.elem([2])
    lw.done()
    text = out.getvalue()
    assert text.startswith("[\n ")
    assert ",\n " in text
    assert text.endswith("]\n")
    assert len(text.splitlines()) == 3


def test_html_characters_escaped():
    out = io.StringIO()
    with ListWriter(out) as lw:
        lw.elem("<a&b>")
    text = out.getvalue()
    assert "<" not in text and ">" not in text and "&" not in text
    assert "\\u003c" in text
    assert json.loads(text) == ["<a&b>"]


def test_non_ascii_kept():
    out = io.StringIO()
    with ListWriter(out) as lw:
        lw.elem("héllo")
    assert "héllo" in out.getvalue()
    assert json.loads(out.getvalue()) == ["héllo"]


def test_nan_rejected():
    lw = ListWriter(io.StringIO())
    with pytest.raises(ValueError):
        lw.elem(float("nan"))


def test_context_manager_does_not_close_on_error():
    out = io.StringIO()
    with pytest.raises(RuntimeError):
        with ListWriter(out) as lw:
            lw.elem(1)
            raise RuntimeError("boom")
    assert not out.getvalue().endswith("]\n")


class _FailingWriter:
    def write(self, data):
        raise OSError("closed")


def test_write_failure_propagates():
    with pytest.raises(OSError):
        ListWriter(_FailingWriter())