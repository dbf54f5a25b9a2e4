from dataclasses import dataclass, field

from monkit.stats import SeriesKey, collect
from monkit.structsource import EmptyStatSource, stat_source_from_struct


@dataclass
class Inner:
    x: float
    label: str = "ignored"


@dataclass
class Outer:
    count: int
    ratio: float
    name: str
    flag: bool
    inner: Inner = field(default_factory=lambda: Inner(0.0))


def _gather(source):
    seen = {}
    source.stats(lambda k, f, v: seen.__setitem__(f, (k, v)))
    return seen


def test_numeric_fields_are_reported():
    key = SeriesKey("s")
    data = Outer(count=3, ratio=0.5, name="n", flag=True, inner=Inner(2.5))
    seen = _gather(stat_source_from_struct(key, data))
    assert set(seen) == {"count", "ratio", "inner.x"}
    assert seen["count"] == (key, 3.0)
    assert seen["ratio"] == (key, 0.5)
    assert seen["inner.x"] == (key, 2.5)


def test_values_are_read_at_stats_time():
    key = SeriesKey("s")
    data = Outer(count=1, ratio=0.0, name="", flag=False)
    source = stat_source_from_struct(key, data)
    data.count = 9
    assert _gather(source)["count"] == (key, 9.0)


def test_non_struct_gives_empty_source():
    source = stat_source_from_struct(SeriesKey("s"), 42)
    assert isinstance(source, EmptyStatSource)
    assert collect(source) == {}


def test_dataclass_type_is_not_a_struct_value():
    assert collect(stat_source_from_struct(SeriesKey("s"), Outer)) == {}


def test_empty_source_reports_nothing():
    calls = []
    EmptyStatSource().stats(lambda *a: calls.append(a))
    assert calls == []