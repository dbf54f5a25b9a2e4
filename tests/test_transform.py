from monkit.stats import SeriesKey, StatSourceFunc, collect
from monkit.transform import (
    CallbackTransformerFunc,
    DeltaTransformer,
    transform_stat_source,
)


def _source(values):
    key = SeriesKey("m")

    def run(cb):
        for field, val in values:
            cb(key, field, val)

    return key, StatSourceFunc(run)


def test_delta_transformer_first_pass_has_no_delta():
    key, source = _source([("total", 10.0), ("rate", 2.0)])
    result = collect(transform_stat_source(source, DeltaTransformer()))
    assert result == {key.with_field("total"): 10.0, key.with_field("rate"): 2.0}


def test_delta_transformer_second_pass_reports_difference():
    totals = [10.0]
    key = SeriesKey("m")
    source = StatSourceFunc(lambda cb: cb(key, "total", totals[0]))
    wrapped = transform_stat_source(source, DeltaTransformer())
    collect(wrapped)
    totals[0] = 25.0
    result = collect(wrapped)
    assert result[key.with_field("total")] == 25.0
    assert result[key.with_field("delta")] == 15.0


def test_delta_transformer_tracks_keys_separately():
    dt = DeltaTransformer()
    seen = []
    cb = dt.transform(lambda k, f, v: seen.append((k, f, v)))
    a, b = SeriesKey("a"), SeriesKey("b")
    cb(a, "total", 1.0)
    cb(b, "total", 5.0)
    cb(a, "total", 3.0)
    assert seen[-1] == (a, "delta", 2.0)
    assert [f for _, f, _ in seen].count("delta") == 1


def test_transformers_apply_in_order():
    def tag(name):
        def make(cb):
            return lambda k, f, v: cb(k, f + "+" + name, v)

        return CallbackTransformerFunc(make)

    key, source = _source([("x", 1.0)])
    result = collect(transform_stat_source(source, tag("first"), tag("second")))
    # the last transformer wraps outermost, so it sees values first
    assert result == {key.with_field("x+second+first"): 1.0}


def test_callback_transformer_func_can_rewrite_values():
    double = CallbackTransformerFunc(lambda cb: lambda k, f, v: cb(k, f, v * 2))
    key, source = _source([("x", 4.0)])
    assert collect(transform_stat_source(source, double)) == {key.with_field("x"): 8.0}