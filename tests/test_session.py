import threading

import pytest

from session import AlwaysRunning, IntervalTicker, Session, format_elapsed


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


class RecordingTicker:
    def __init__(self):
        self.callback = None
        self.starts = 0
        self.stops = 0

    def start(self, callback):
        self.callback = callback
        self.starts += 1

    def stop(self):
        self.callback = None
        self.stops += 1


@pytest.mark.parametrize('seconds, text', [
    (0, "00:00"),
    (9.99, "00:09"),
    (65, "01:05"),
    (3600, "60:00"),
    (-4, "00:00"),
])
def test_format_elapsed(seconds, text):
    assert format_elapsed(seconds) == text


def test_new_session_is_idle():
    session = Session()
    assert not session.is_running
    assert session.start_timestamp is None
    assert session.elapsed_text == "00:00"


def test_start_records_timestamp_once():
    clock = FakeClock(100.0)
    ticker = RecordingTicker()
    session = Session(ticker=ticker, clock=clock)

    assert session.start() is True
    clock.now = 130.0
    assert session.start() is False
    assert session.start_timestamp == 100.0
    assert ticker.starts == 1


def test_ticker_refreshes_clock_text():
    clock = FakeClock(100.0)
    ticker = RecordingTicker()
    session = Session(ticker=ticker, clock=clock)
    session.start()

    clock.now = 165.9
    ticker.callback()
    assert session.elapsed_text == "01:05"


def test_restart_stops_clock_and_goes_idle():
    clock = FakeClock(100.0)
    ticker = RecordingTicker()
    session = Session(ticker=ticker, clock=clock)
    session.start()
    clock.now = 200.0
    session.refresh_display()

    session.restart()
    assert not session.is_running
    assert session.start_timestamp is None
    assert session.elapsed_text == "00:00"
    assert ticker.stops == 1
    assert session.refresh_display() == "00:00"


def test_idle_clock_stays_at_zero():
    session = Session(clock=FakeClock(500.0))
    assert session.refresh_display(now=900.0) == "00:00"


def test_always_running_ignores_commands():
    session = AlwaysRunning()
    assert session.is_running
    assert session.start() is False
    session.restart()
    assert session.is_running


def test_interval_ticker_calls_back_until_stopped():
    fired = threading.Event()
    ticker = IntervalTicker(interval=0.01)
    ticker.start(fired.set)
    try:
        assert fired.wait(2.0)
        assert ticker.active
    finally:
        ticker.stop()
    assert not ticker.active


def test_restart_during_refresh_keeps_clock_at_zero():
    times = iter([100.0, 107.0])
    session = None

    def clock():
        now = next(times)
        if now == 107.0:
            # Reset arrives while the clock text is being computed
            session.restart()
        return now

    session = Session(clock=clock)
    session.start()
    assert session.refresh_display() == "00:00"
    assert session.elapsed_text == "00:00"
    assert not session.is_running


def test_refresh_from_previous_run_is_discarded():
    times = iter([100.0, 107.0, 250.0])
    session = None

    def clock():
        now = next(times)
        if now == 107.0:
            session.restart()
            session.start()
        return now

    session = Session(clock=clock)
    session.start()
    session.refresh_display()
    # The 7 seconds belonged to the first run; the new run starts at 00:00
    assert session.elapsed_text == "00:00"
    assert session.start_timestamp == 250.0
