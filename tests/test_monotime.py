import time

from monkit.monotime import now


def test_monotime_tracks_sleep():
    sleep = 1.0
    start = now()
    time.sleep(sleep)
    finish = now()
    delta = abs((finish - start) - sleep)
    assert delta <= 0.25


def test_monotime_never_goes_backwards():
    readings = [now() for _ in range(1000)]
    assert readings == sorted(readings)


def test_monotime_is_close_to_wall_clock():
    assert abs(now() - time.time()) < 5.0