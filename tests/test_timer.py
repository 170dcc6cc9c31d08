import time

from mailcampaign.timer import Timer


def test_stop_measures_sleep():
    timer = Timer()
    time.sleep(0.05)
    assert timer.stop() >= 40


def test_stop_is_integer_and_non_negative():
    elapsed = Timer().stop()
    assert isinstance(elapsed, int) and elapsed >= 0


def test_start_resets():
    timer = Timer()
    time.sleep(0.05)
    before = timer.stop()
    timer.start()
    assert timer.stop() < before


def test_stop_is_monotonic():
    timer = Timer()
    first = timer.stop()
    time.sleep(0.01)
    assert timer.stop() >= first