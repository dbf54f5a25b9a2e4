import time

from monkit import monotime
from monkit.meter import DiffMeter, Meter
from monkit.stats import SeriesKey, collect


def _gather(source):
    seen = {}
    source.stats(lambda key, field, val: seen.__setitem__((key, field), val))
    return seen


def test_total_is_sum_of_marks():
    meter = Meter(SeriesKey("events"))
    amounts = [4, 1, 10]
    for amount in amounts:
        meter.mark(amount)
    assert meter.total() == float(sum(amounts))


def test_fresh_meter_has_zero_rate():
    meter = Meter(SeriesKey("idle"))
    time.sleep(0.01)
    assert meter.rate() == 0.0
    assert meter.total() == 0.0


def test_set_total_adds_to_marks():
    meter = Meter(SeriesKey("events"))
    meter.set_total(5)
    meter.mark(3)
    assert meter.total() == float(5 + 3)


def test_reset_replaces_everything():
    meter = Meter(SeriesKey("events"))
    meter.mark(50)
    meter.reset(10)
    assert meter.total() == 10.0
    time.sleep(0.01)
    assert meter.rate() == 0.0


def test_rate_is_bounded_by_elapsed_time():
    before = monotime.now()
    meter = Meter(SeriesKey("events"))
    after_create = monotime.now()
    meter.mark(50)
    time.sleep(0.05)
    before_rate = monotime.now()
    rate = meter.rate()
    after_rate = monotime.now()
    assert 50 / (after_rate - before) <= rate <= 50 / (before_rate - after_create)


def test_ticks_preserve_total():
    meter = Meter(SeriesKey("events"))
    marked = 0
    for amount in range(1, 40):
        meter.mark(amount)
        marked += amount
        meter.tick(monotime.now())
        assert meter.total() == float(marked)


def test_idle_ticks_keep_rare_events_in_window():
    meter = Meter(SeriesKey("rare"))
    meter.mark(7)
    for _ in range(30):
        meter.tick(monotime.now())
    time.sleep(0.01)
    assert meter.rate() > 0.0
    assert meter.total() == 7.0


def test_stats_reports_rate_and_total_fields():
    key = SeriesKey("m")
    meter = Meter(key)
    meter.mark(3)
    seen = _gather(meter)
    assert set(seen) == {(key, "rate"), (key, "total")}
    assert seen[(key, "total")] == 3.0


def test_collect_uses_field_names():
    meter = Meter(SeriesKey("m"))
    meter.mark(2)
    collected = collect(meter)
    assert set(collected) == {"m rate", "m total"}
    assert collected["m total"] == 2.0


def test_diff_meter_reports_differences():
    m1 = Meter(SeriesKey("a"))
    m2 = Meter(SeriesKey("b"))
    m1.mark(10)
    m2.mark(4)
    key = SeriesKey("a_minus_b")
    seen = _gather(DiffMeter(key, m1, m2))
    assert seen[(key, "total")] == float(10 - 4)
    assert set(seen) == {(key, "rate"), (key, "total")}