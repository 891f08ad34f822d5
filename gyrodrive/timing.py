# timing.py
"""
Elapsed time and run-active signal for the control loop.
"""
import threading
import time


class ElapsedTimer:
    def __init__(self):
        self._start = time.monotonic()

    def reset(self):
        self._start = time.monotonic()

    def seconds(self) -> float:
        return time.monotonic() - self._start


class RunSignal:
    """
    Run-active flag polled by every maneuver loop.

    Calling the signal returns True while the run is active. cancel() may
    be called from any thread or a signal handler.
    """

    def __init__(self, active=False):
        self._event = threading.Event()
        if active:
            self._event.set()

    def start(self):
        self._event.set()

    def cancel(self):
        self._event.clear()

    def __call__(self) -> bool:
        return self._event.is_set()
