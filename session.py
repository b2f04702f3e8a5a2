"""
Start/restart lifecycle and the elapsed-time clock shown next to the field.

The clock text is recomputed by a ticker that runs about once per second of
wall-clock time, independently of the frame rate. Tickers only ever call
Session.refresh_display().
"""
import threading
import time

IDLE = 'idle'
RUNNING = 'running'

ZERO_CLOCK = '00:00'


def format_elapsed(seconds):
    """Whole seconds as zero-padded MM:SS"""
    seconds = max(0, int(seconds))
    minutes, seconds = divmod(seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


class IntervalTicker:
    """Calls a function every `interval` seconds on a daemon thread."""
    def __init__(self, interval=1.0):
        self.interval = interval
        self._stop_event = None
        self._thread = None

    @property
    def active(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self, callback):
        self.stop()
        stop_event = threading.Event()

        def loop():
            while not stop_event.wait(self.interval):
                callback()

        self._stop_event = stop_event
        self._thread = threading.Thread(target=loop, daemon=True)
        self._thread.start()

    def stop(self):
        if self._stop_event is not None:
            self._stop_event.set()
        self._stop_event = None
        self._thread = None


class Session:
    """
    Two-state lifecycle gating the simulation.
    Idle: physics suspended, clock at 00:00. Running: entered by start().

    The ticker calls refresh_display() from its own thread, so state changes
    and clock writes go through one lock.
    """
    def __init__(self, ticker=None, clock=time.monotonic):
        self.state = IDLE
        self.start_timestamp = None
        self.elapsed_text = ZERO_CLOCK
        self.ticker = ticker
        self.clock = clock
        self._lock = threading.Lock()

    @property
    def is_running(self):
        return self.state == RUNNING

    def start(self):
        """
        Enter Running. Returns False (and changes nothing) if already running.
        """
        with self._lock:
            if self.is_running:
                return False
            self.state = RUNNING
            self.start_timestamp = self.clock()
            self.elapsed_text = ZERO_CLOCK
        if self.ticker is not None:
            self.ticker.start(self.refresh_display)
        return True

    def restart(self):
        """Back to Idle with the clock stopped and cleared."""
        with self._lock:
            self.state = IDLE
            self.start_timestamp = None
            self.elapsed_text = ZERO_CLOCK
        if self.ticker is not None:
            self.ticker.stop()

    def _started_at(self):
        with self._lock:
            return self.start_timestamp if self.is_running else None

    def elapsed_seconds(self, now=None):
        started = self._started_at()
        if started is None:
            return 0
        now = self.clock() if now is None else now
        return int(now - started)

    def refresh_display(self, now=None):
        started = self._started_at()
        if started is None:
            return self.elapsed_text
        now = self.clock() if now is None else now
        text = format_elapsed(now - started)
        with self._lock:
            # Drop the result if a restart (or a new start) happened meanwhile
            if self.is_running and self.start_timestamp == started:
                self.elapsed_text = text
            return self.elapsed_text


class AlwaysRunning:
    """Session for the ungated variant: always running, commands do nothing."""
    state = RUNNING
    start_timestamp = None
    elapsed_text = ZERO_CLOCK
    is_running = True

    def start(self):
        return False

    def restart(self):
        pass

    def refresh_display(self, now=None):
        return self.elapsed_text
